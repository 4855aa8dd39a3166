from typing import Iterable

from frothy import FrothyValue
from frothy.types.values import Block, Builtin, DeferredRef, Function, format_value, is_number

# ----------------- ANSI colors -----------------
RESET = "\033[0m"
COLOR_NUMBER = "\033[97m"
COLOR_NAME = "\033[94m"
COLOR_BLOCK = "\033[90m"
COLOR_FUNCTION = "\033[92m"
COLOR_BUILTIN = "\033[95m"

# ----------------- Defaults -----------------
DEFAULT_OPTIONS = {
    "max_line_length": 80,
    "display_legend": False,
    "color": True,
}

PLAIN_OPTIONS = {**DEFAULT_OPTIONS, "color": False}


# ----------------- Colorize utility -----------------
def colorize(value: FrothyValue, options: dict = DEFAULT_OPTIONS) -> str:
    text = format_value(value)
    if not options.get("color", True):
        return text
    if is_number(value):
        return f"{COLOR_NUMBER}{text}{RESET}"
    if isinstance(value, DeferredRef):
        return f"{COLOR_NAME}{text}{RESET}"
    if isinstance(value, Function):
        return f"{COLOR_FUNCTION}{text}{RESET}"
    if isinstance(value, Builtin):
        return f"{COLOR_BUILTIN}{text}{RESET}"
    if isinstance(value, Block):
        return f"{COLOR_BLOCK}{text}{RESET}"
    return text


def _legend() -> str:
    legend_items = [
        f"{COLOR_NUMBER}Number{RESET}",
        f"{COLOR_NAME}Name{RESET}",
        f"{COLOR_BLOCK}Block{RESET}",
        f"{COLOR_FUNCTION}Function{RESET}",
        f"{COLOR_BUILTIN}Builtin{RESET}",
    ]
    return "Color Key: " + " | ".join(legend_items) + "\n"


# ----------------- Pretty printer -----------------
def pprint_stack(stack: Iterable[FrothyValue], options: dict = DEFAULT_OPTIONS) -> str:
    """Render the stack bottom first; wraps one value per line when too long."""
    values = list(stack)
    legend_str = _legend() if options.get("display_legend", False) and options.get("color", True) else ""
    if not values:
        return legend_str + "<0>"

    parts = [colorize(v, options) for v in values]
    plain_len = sum(len(format_value(v)) + 1 for v in values)
    header = f"<{len(values)}>"
    if len(header) + plain_len <= options.get("max_line_length", 80):
        return legend_str + header + " " + " ".join(parts)
    return legend_str + header + "\n" + "\n".join("  " + p for p in parts)
