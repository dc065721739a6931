# utils/base_model.py
from typing import Any

from pydantic import BaseModel


class ImmutableModel(BaseModel):
    """
    Base class for all design value objects.

    Instances are frozen after creation: the document tree is built once by
    the parser and only read afterwards. Unknown constructor arguments are
    rejected so a typo in a field name fails loudly instead of being dropped.
    """
    model_config = {
        "frozen": True,  # No assignment after construction
        "extra": "forbid",
    }

    def describe(self, **overrides: Any) -> str:
        """
        Format the model fields as a compact ``Class(key=value, ...)`` string.

        Args:
            **overrides: Values to show instead of the stored ones (for
                abbreviating large fields in log messages)

        Returns:
            Single-line description suitable for logging
        """
        values = {name: getattr(self, name) for name in type(self).model_fields}
        values.update(overrides)
        parts = ", ".join(f"{key}={value!r}" for key, value in values.items())
        return f"{type(self).__name__}({parts})"
