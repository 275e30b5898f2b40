"""
Mechanic create/edit dialog.

The form owns its field values and open/closed state. Opening it resets the
values, either to the mechanic being edited or to blank defaults, and a
successful submit hands the resulting ``Mechanic`` to the caller's callback
before closing and resetting the dialog.
"""

import logging
import uuid
from typing import Callable, Dict, Optional

from models import Mechanic

logger = logging.getLogger(__name__)

BLANK_MECHANIC = {"id": "", "name": "", "specialization": "", "phone": ""}


class FormValidationError(Exception):
    """Raised by ``submit`` with a field name -> message map."""

    def __init__(self, errors: Dict[str, str]):
        super().__init__(", ".join(errors.values()))
        self.errors = errors


class MechanicForm:
    required = {"name": "Name is required"}

    def __init__(self, on_submit: Callable[[Mechanic], None]):
        self.on_submit = on_submit
        self.is_open = False
        self.mechanic: Optional[Mechanic] = None
        self.values = dict(BLANK_MECHANIC)
        self.errors: Dict[str, str] = {}

    @property
    def is_editing(self) -> bool:
        return self.mechanic is not None

    @property
    def title(self) -> str:
        return "Edit Mechanic" if self.is_editing else "Register New Mechanic"

    def open(self, mechanic: Optional[Mechanic] = None):
        """Open in edit mode when a mechanic is given, create mode otherwise."""
        self.mechanic = mechanic
        self.reset(mechanic)
        self.is_open = True

    def close(self):
        self.is_open = False
        self.mechanic = None
        self.reset()

    def reset(self, mechanic: Optional[Mechanic] = None):
        if mechanic is None:
            self.values = dict(BLANK_MECHANIC)
        else:
            self.values = {key: value or "" for key, value in mechanic.model_dump().items()}
        self.errors = {}

    def set_value(self, field: str, value):
        if field not in BLANK_MECHANIC or field == "id":
            raise KeyError(field)
        self.values[field] = value

    def validate(self) -> Dict[str, str]:
        errors = {}
        for field, message in self.required.items():
            value = self.values.get(field)
            if value is None or not str(value).strip():
                errors[field] = message
        return errors

    def submit(self, values: Optional[dict] = None) -> Mechanic:
        if not self.is_open:
            raise RuntimeError("Mechanic form is not open")
        for field, value in (values or {}).items():
            self.set_value(field, value)

        self.errors = self.validate()
        if self.errors:
            raise FormValidationError(self.errors)

        mechanic_id = self.mechanic.id if self.is_editing else str(uuid.uuid4())
        mechanic = Mechanic(
            id=mechanic_id,
            name=self.values["name"].strip(),
            specialization=self.values.get("specialization") or None,
            phone=self.values.get("phone") or None,
        )
        logger.debug("Submitting mechanic %s (editing=%s)", mechanic.id, self.is_editing)
        self.on_submit(mechanic)
        self.close()
        return mechanic
