"""Correlation tokens carried in Discord custom ids.

A token ties a later interaction (button press, modal submission) back to the
flow and template it was minted for, so no session state is kept between
interactions. The wire form is a fixed prefix followed by the template id.
"""

from dataclasses import dataclass
from enum import Enum


class FlowKind(Enum):
    """Flow a token belongs to; the value is its wire prefix."""

    CREATE = "create_"  # "reuse this template" buttons
    BUILD = "builder_"  # caption dialogs

    @property
    def prefix(self) -> str:
        return self.value


@dataclass(frozen=True)
class CorrelationToken:
    """A flow kind plus the template id it refers to."""

    kind: FlowKind
    template_id: str

    def encode(self) -> str:
        return self.kind.prefix + self.template_id

    @classmethod
    def parse(cls, raw: str) -> "CorrelationToken | None":
        """Decode a custom id.

        Returns:
            The token, or None when the string carries neither prefix. Such
            ids belong to some other component and are ignored.
        """
        for kind in FlowKind:
            if raw.startswith(kind.prefix):
                return cls(kind=kind, template_id=raw[len(kind.prefix) :])
        return None


def create_token(template_id: str) -> CorrelationToken:
    return CorrelationToken(FlowKind.CREATE, template_id)


def build_token(template_id: str) -> CorrelationToken:
    return CorrelationToken(FlowKind.BUILD, template_id)
