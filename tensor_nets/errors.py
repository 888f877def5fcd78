class TensorNetsError(RuntimeError):
    """Base class for errors raised by tensor_nets."""


class EnforceError(TensorNetsError):
    """Raised when a fatal precondition or invariant does not hold."""


class OperatorCreationError(TensorNetsError):
    """Raised when an operator def cannot be turned into a runnable operator."""


class UnknownNetTypeError(TensorNetsError):
    """Raised when no net implementation is registered for a net type."""


def enforce(condition: bool, *message) -> None:
    """Raises EnforceError built from `message` when `condition` is false."""
    if not condition:
        raise EnforceError("".join(str(m) for m in message))
