"""A runner that compiles, tests and tracks progress through Rust exercises."""

__version__ = "4.4.0"