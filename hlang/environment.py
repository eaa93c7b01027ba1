from typing import Any, Dict, Optional
from hlang.errors import HlangError, UNBOUND_VARIABLE


class Environment:
    """Represents a scope environment mapping identifiers to values.

    The parent link is shared, never copied: closures keep a reference to
    the environment they were declared in and observe later assignments.
    """
    def __init__(self, parent: Optional['Environment'] = None):
        self.parent = parent
        self.values: Dict[str, Any] = {}

    def get(self, name: str) -> Any:
        env: Optional[Environment] = self
        while env is not None:
            if name in env.values:
                return env.values[name]
            env = env.parent
        raise HlangError(UNBOUND_VARIABLE, f'undefined variable: {name}')

    def set(self, name: str, value: Any) -> Any:
        # Assignment only rebinds an existing name; it never declares one
        env: Optional[Environment] = self
        while env is not None:
            if name in env.values:
                env.values[name] = value
                return value
            env = env.parent
        raise HlangError(UNBOUND_VARIABLE, f'cannot assign to undefined variable: {name}')

    def declare(self, name: str, value: Any) -> Any:
        self.values[name] = value
        return value

    def __contains__(self, name: str) -> bool:
        env: Optional[Environment] = self
        while env is not None:
            if name in env.values:
                return True
            env = env.parent
        return False
