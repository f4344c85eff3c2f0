from .normalize import coerce_values, normalize_xy

__all__ = ["coerce_values", "normalize_xy"]
