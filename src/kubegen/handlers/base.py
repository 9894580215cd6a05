"""Base handler interface."""

import io
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional

from pydantic import BaseModel
from ruamel.yaml import YAML
from ruamel.yaml.scalarstring import LiteralScalarString


# Observer invoked as (label, completed, total) after each step
ProgressCallback = Callable[[str, int, int], None]


class BaseHandler(ABC):
    """Base handler that every resource renderer implements.

    A handler turns one fully linked model into manifest text. It has no
    side effects and never looks at other models.
    """

    def __init__(self):
        """Initialize the YAML emitter."""
        self.yaml = YAML()
        self.yaml.default_flow_style = False
        self.yaml.explicit_start = True
        self.yaml.width = 4096
        self.yaml.indent(mapping=2, sequence=4, offset=2)

    @abstractmethod
    def generate(self, model: BaseModel) -> str:
        """Render the model as manifest text."""
        pass

    def dump(self, document: Dict[str, Any]) -> str:
        """Dump a manifest document; each document starts with ``---``."""
        stream = io.StringIO()
        self.yaml.dump(document, stream)
        return stream.getvalue()


def metadata(name: str, labels: Optional[Dict[str, str]] = None, **extra: Any) -> Dict[str, Any]:
    """Build a metadata block, skipping empty labels."""
    block: Dict[str, Any] = {"name": name}
    block.update({key: value for key, value in extra.items() if value})
    if labels:
        block["labels"] = dict(labels)
    return block


def text_block(value: str) -> str:
    """Emit multi-line text as a literal block."""
    if "\n" in value:
        return LiteralScalarString(value)
    return value
