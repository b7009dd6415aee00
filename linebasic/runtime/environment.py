"""
linebasic Runtime Environment

The environment is the map from variable name to its current Value.
Names are case-insensitive: the spelling of the first assignment is kept
for display, lookups fold case.

Key classes:
- Variable: Named binding
- VariableStore: Case-insensitive name -> Variable map with a capacity bound
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from linebasic.errors import BasicNameError, CapacityError
from linebasic.values import Value


@dataclass
class Variable:
    """A named binding, updated in place on reassignment."""
    name: str
    value: Value

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, **self.value.to_dict()}


class VariableStore:
    """
    Runtime variable table.

    Variables are created on first assignment and never deleted except by
    clear().
    """

    def __init__(self, max_variables: int = 1000):
        self.max_variables = max_variables
        self._variables: Dict[str, Variable] = {}

    @staticmethod
    def _key(name: str) -> str:
        return name.upper()

    def get(self, name: str) -> Optional[Variable]:
        """Get a variable by name, or None."""
        return self._variables.get(self._key(name))

    def lookup(self, name: str) -> Value:
        """Get a variable's value; undefined names are an error."""
        variable = self.get(name)
        if variable is None:
            raise BasicNameError(f"Undefined variable: {name}")
        return variable.value

    def set(self, name: str, value: Value) -> Variable:
        """Create or update a binding."""
        variable = self.get(name)
        if variable is not None:
            variable.value = value
            return variable

        if len(self._variables) >= self.max_variables:
            raise CapacityError("Too many variables")

        variable = Variable(name, value)
        self._variables[self._key(name)] = variable
        return variable

    def __contains__(self, name: str) -> bool:
        return self._key(name) in self._variables

    def __len__(self) -> int:
        return len(self._variables)

    def snapshot(self) -> List[Tuple[str, Value]]:
        """Read-only (name, value) pairs."""
        return [(v.name, v.value) for v in self._variables.values()]

    def clear(self) -> None:
        self._variables.clear()

    def to_dict(self) -> Dict[str, Any]:
        return {v.name: v.value.to_dict() for v in self._variables.values()}
