"""Numeric limits and fixed texts for the bignumber engine.

Centralizes the native-precision bound the limb radix is derived from and the
sentinel strings error-state values render as.
"""

# Largest integer an IEEE-754 double represents exactly (2^53 - 1).
# Limb products must stay below this bound so the kernels mirror what native
# floating-point arithmetic could compute without precision loss.
MAX_EXACT_INTEGER = 2**53 - 1

# Sentinel texts rendered by error-state values
INVALID_NUMBER_TEXT = "Invalid Number"
DIVISION_BY_ZERO_TEXT = "Invalid Number - Division By Zero"

# Environment variable overriding the process-wide limb base
LIMB_BASE_ENV_VAR = "BIGNUMBER_LIMB_BASE"

# Characters accepted as decimal digits (str.isdigit() also accepts
# superscripts and other scripts)
DECIMAL_DIGITS = "0123456789"
SIGN_TOKENS = ("+", "-")
