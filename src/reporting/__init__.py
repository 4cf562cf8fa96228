from .formatting import format_failed

__all__ = ["format_failed"]
