# Frothy: a small Forth-like postfix language.
#
# Runtime values are plain Python objects where possible:
# - numbers are float
# - code blocks, functions, builtins and deferred names are the small classes
#   in frothy.types.values
# FrothyValue is kept as an alias for annotations across the package.

from typing import Any

__version__ = "0.2.0"

# Runtime value alias
FrothyValue = Any
