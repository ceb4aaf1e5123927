"""Types definitions that are common in interface description schemas."""

from __future__ import annotations

from enum import Enum

SCALAR_TYPE_TO_TYPESCRIPT = {
    "Boolean": "boolean",
    "Integer": "number",
    "Float": "number",
    "String": "string",
}


class MessageKind(Enum):
    """Kinds of messages that an interface function can describe."""

    REQUEST = "request"
    RESPONSE = "response"
    NOTIFICATION = "notification"

    @property
    def suffix(self) -> str:
        """The suffix appended to a function name to form its declaration name."""
        return _MESSAGE_KIND_SUFFIX[self]

    @property
    def type_map_name(self) -> str:
        """The name of the top-level lookup declaration for this kind."""
        return _MESSAGE_KIND_TYPE_MAP[self]


_MESSAGE_KIND_SUFFIX = {
    MessageKind.REQUEST: "$Request",
    MessageKind.RESPONSE: "$Response",
    MessageKind.NOTIFICATION: "",
}

_MESSAGE_KIND_TYPE_MAP = {
    MessageKind.REQUEST: "SendTypes",
    MessageKind.RESPONSE: "ResponseTypes",
    MessageKind.NOTIFICATION: "NotificationTypes",
}

# Order in which the lookup declarations are emitted.
MESSAGE_KIND_ORDER = (MessageKind.NOTIFICATION, MessageKind.REQUEST, MessageKind.RESPONSE)


class EnumShape(Enum):
    """Shapes an enumeration can take in the generated declarations."""

    DISCRETE = "discrete"
    LITERAL_UNION = "literal_union"
