class ModeLambdaError(Exception):
    """Base class for errors raised while searching the mode of lambda"""


class InputError(ModeLambdaError, ValueError):
    """Counts, priors or options are inconsistent; raised before any optimization"""


class NumericalError(ModeLambdaError, ArithmeticError):
    """The search cannot proceed: non-finite density values or a search that does not stop"""
