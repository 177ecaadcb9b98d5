"""Core types shared by graph models: roles, port kinds, connection ids, node data."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, auto
from types import MappingProxyType
from typing import Any, Callable, Mapping


class PortType(Enum):
    """Side of a node a port sits on."""

    IN = auto()
    OUT = auto()
    NONE = auto()


class NodeRole(Enum):
    """Kinds of information a graph model stores about a node."""

    TYPE = auto()
    POSITION = auto()
    SIZE = auto()
    CAPTION_VISIBLE = auto()
    CAPTION = auto()
    STYLE = auto()
    INTERNAL_DATA = auto()
    IN_PORT_COUNT = auto()
    OUT_PORT_COUNT = auto()
    WIDGET = auto()


class PortRole(Enum):
    """Kinds of information a graph model stores about a port."""

    DATA = auto()
    DATA_TYPE = auto()
    CONNECTION_POLICY = auto()
    CAPTION_VISIBLE = auto()
    CAPTION = auto()


class ConnectionPolicy(Enum):
    """How many connections a port accepts."""

    ONE = auto()
    MANY = auto()


@dataclass(frozen=True)
class ConnectionId:
    """A directed link from an output port to an input port."""

    out_node_id: int
    out_port_index: int
    in_node_id: int
    in_port_index: int


def get_node_id(port_type: PortType, connection_id: ConnectionId) -> int:
    """Return the id of the node at the given end of a connection."""
    if port_type is PortType.IN:
        return connection_id.in_node_id
    if port_type is PortType.OUT:
        return connection_id.out_node_id
    raise ValueError(f"connection has no end of type {port_type!r}")


def get_port_index(port_type: PortType, connection_id: ConnectionId) -> int:
    """Return the port index at the given end of a connection."""
    if port_type is PortType.IN:
        return connection_id.in_port_index
    if port_type is PortType.OUT:
        return connection_id.out_port_index
    raise ValueError(f"connection has no end of type {port_type!r}")


_JSON_KEYS = {
    "out_node_id": "outNodeId",
    "out_port_index": "outPortIndex",
    "in_node_id": "intNodeId",
    "in_port_index": "inPortIndex",
}


def connection_to_json(connection_id: ConnectionId) -> dict[str, int]:
    """Serialise a connection id to the scene file's JSON object form."""
    return {key: getattr(connection_id, attr) for attr, key in _JSON_KEYS.items()}


def connection_from_json(data: dict[str, Any]) -> ConnectionId:
    """Build a connection id from its JSON object form; missing fields read as 0."""
    return ConnectionId(**{attr: int(data.get(key, 0)) for attr, key in _JSON_KEYS.items()})


@dataclass(frozen=True)
class NodeDataType:
    """Identifier and display name of a kind of data flowing between nodes."""

    id: str = ""
    name: str = ""


class NodeData(ABC):
    """A value carried along a connection."""

    @abstractmethod
    def type(self) -> NodeDataType:
        """Return the data type of this value."""


class Signal:
    """A list of callables invoked together when the signal is emitted."""

    def __init__(self) -> None:
        self._slots: list[Callable[..., Any]] = []

    def connect(self, slot: Callable[..., Any]) -> None:
        self._slots.append(slot)

    def disconnect(self, slot: Callable[..., Any]) -> None:
        """Remove a slot; raises ValueError if it was never connected."""
        self._slots.remove(slot)

    def emit(self, *args: Any) -> None:
        for slot in list(self._slots):
            slot(*args)


class NodeDelegateModel(ABC):
    """Behaviour of one node in a data-flow graph: its ports and computation."""

    # Whether port captions are drawn; subclasses with named ports switch it on.
    _port_captions_shown: bool = False
    # Fixed captions keyed by (side, index); ports not listed have none.
    _port_captions: Mapping[tuple[PortType, int], str] = MappingProxyType({})

    def __init__(self) -> None:
        self.data_updated = Signal()
        self.data_invalidated = Signal()

    @abstractmethod
    def caption(self) -> str:
        """Text shown in the node's title."""

    @abstractmethod
    def name(self) -> str:
        """Unique name the model is registered under."""

    def caption_visible(self) -> bool:
        return True

    def port_caption_visible(self, port_type: PortType, port_index: int) -> bool:
        """Whether the caption of a port is shown."""
        return self._port_captions_shown

    def port_caption(self, port_type: PortType, port_index: int) -> str:
        """Caption of a port, empty when it has none."""
        return self._port_captions.get((port_type, port_index), "")

    @abstractmethod
    def n_ports(self, port_type: PortType) -> int:
        """Number of ports on the given side."""

    @abstractmethod
    def data_type(self, port_type: PortType, port_index: int) -> NodeDataType:
        """Data type accepted or produced by a port."""

    @abstractmethod
    def out_data(self, port_index: int) -> NodeData | None:
        """Value currently produced on an output port."""

    @abstractmethod
    def set_in_data(self, data: NodeData | None, port_index: int) -> None:
        """Receive a value (or its absence) on an input port."""

    def save(self) -> dict[str, Any]:
        return {"model-name": self.name()}

    def load(self, data: dict[str, Any]) -> None:
        """Restore internal state from saved JSON; the base model keeps none."""