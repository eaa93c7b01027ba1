from dataclasses import dataclass
from typing import Any


@dataclass
class BuiltinFunction:
    name: str
    fn: Any

    def __repr__(self) -> str:
        return f"<builtin {self.name}>"
