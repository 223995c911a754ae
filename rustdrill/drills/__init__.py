"""Reference solutions to the exercises, written in Python."""