class HlangError(Exception):
    """Exception type used to propagate hlang runtime errors."""
    def __init__(self, name: str, message: str):
        super().__init__(message)
        self.name = name
        self.message = message


# Error categories reported by the interpreter
UNBOUND_VARIABLE = 'UnboundVariable'
NOT_A_FUNCTION = 'NotAFunction'
DIVISION_BY_ZERO = 'DivisionByZero'
MODULO_BY_ZERO = 'ModuloByZero'
UNSUPPORTED_OPERATOR = 'UnsupportedOperator'
UNHANDLED_NODE = 'UnhandledNode'
CALL_DEPTH_EXCEEDED = 'CallDepthExceeded'
