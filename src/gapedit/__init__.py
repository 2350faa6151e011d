"""Gap-buffer text editing engine with a Textual front end."""

__all__ = [
    "adapters",
    "actions",
    "buffer",
    "engine",
    "errors",
    "keymaps",
    "runtime",
    "view",
]

__version__ = "0.1.0"
