"""Floating-point arithmetic diagnosis (paranoia) and the Whetstone benchmark."""

__version__ = "1.0.0"
__all__ = [
    "overflow",
    "paranoia",
    "powers",
    "radix",
    "report",
    "rounding",
    "sqrt",
    "state",
    "underflow",
    "whetstone",
]