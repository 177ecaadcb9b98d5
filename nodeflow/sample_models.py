"""Small node models: text passing, coloured connections, styling and locking."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .definitions import NodeData, NodeDataType, NodeDelegateModel, PortType

_OUT_PORT = 0


@dataclass(frozen=True)
class TextData(NodeData):
    """A piece of text carried between nodes."""

    text: str = ""

    def type(self) -> NodeDataType:
        return NodeDataType("text", "Text")


class TextSourceDataModel(NodeDelegateModel):
    """Source node producing user-edited text."""

    def __init__(self) -> None:
        super().__init__()
        self.text = "Default Text"

    def caption(self) -> str:
        return "Text Source"

    def caption_visible(self) -> bool:
        return False

    def name(self) -> str:
        return "TextSourceDataModel"

    def n_ports(self, port_type: PortType) -> int:
        return 0 if port_type is PortType.IN else 1

    def data_type(self, port_type: PortType, port_index: int) -> NodeDataType:
        return TextData().type()

    def out_data(self, port_index: int) -> NodeData | None:
        return TextData(self.text)

    def set_in_data(self, data: NodeData | None, port_index: int) -> None:
        """A source has no inputs; incoming data is ignored."""

    def on_text_edited(self, text: str) -> None:
        """Take the edited text and announce new output."""
        self.text = text
        self.data_updated.emit(_OUT_PORT)


class TextDisplayDataModel(NodeDelegateModel):
    """Sink node showing the text it receives."""

    def __init__(self) -> None:
        super().__init__()
        self.display_text = "Resulting Text"

    def caption(self) -> str:
        return "Text Display"

    def caption_visible(self) -> bool:
        return False

    def name(self) -> str:
        return "TextDisplayDataModel"

    def n_ports(self, port_type: PortType) -> int:
        return 0 if port_type is PortType.OUT else 1

    def data_type(self, port_type: PortType, port_index: int) -> NodeDataType:
        return TextData().type()

    def out_data(self, port_index: int) -> NodeData | None:
        return None

    def set_in_data(self, data: NodeData | None, port_index: int) -> None:
        self.display_text = data.text if isinstance(data, TextData) else ""


@dataclass(frozen=True)
class MyNodeData(NodeData):
    """Marker data type used by the sample models."""

    def type(self) -> NodeDataType:
        return NodeDataType("MyNodeData", "My Node Data")


@dataclass(frozen=True)
class SimpleNodeData(NodeData):
    """Second marker data type used by the sample models."""

    def type(self) -> NodeDataType:
        return NodeDataType("SimpleData", "Simple Data")


class NaiveDataModel(NodeDelegateModel):
    """Two inputs and two outputs of different data types; no logic."""

    def caption(self) -> str:
        return "Naive Data Model"

    def name(self) -> str:
        return "NaiveDataModel"

    def n_ports(self, port_type: PortType) -> int:
        if port_type in (PortType.IN, PortType.OUT):
            return 2
        return 1

    def data_type(self, port_type: PortType, port_index: int) -> NodeDataType:
        if port_type in (PortType.IN, PortType.OUT):
            if port_index == 0:
                return MyNodeData().type()
            if port_index == 1:
                return SimpleNodeData().type()
        return NodeDataType()

    def out_data(self, port_index: int) -> NodeData | None:
        if port_index < 1:
            return MyNodeData()
        return SimpleNodeData()

    def set_in_data(self, data: NodeData | None, port_index: int) -> None:
        """Incoming data is ignored."""


class MyDataModel(NodeDelegateModel):
    """Three ports on each side, all of one data type; no logic."""

    def caption(self) -> str:
        return "My Data Model"

    def name(self) -> str:
        return "MyDataModel"

    def save(self) -> dict[str, Any]:
        return {"name": self.name()}

    def n_ports(self, port_type: PortType) -> int:
        return 3

    def data_type(self, port_type: PortType, port_index: int) -> NodeDataType:
        return MyNodeData().type()

    def out_data(self, port_index: int) -> NodeData | None:
        return MyNodeData()

    def set_in_data(self, data: NodeData | None, port_index: int) -> None:
        """Incoming data is ignored."""


class SimpleDataModel(NodeDelegateModel):
    """Two ports on each side carrying simple data; no logic."""

    def caption(self) -> str:
        return "Simple Data Model"

    def name(self) -> str:
        return "SimpleDataModel"

    def n_ports(self, port_type: PortType) -> int:
        return 2

    def data_type(self, port_type: PortType, port_index: int) -> NodeDataType:
        return SimpleNodeData().type()

    def out_data(self, port_index: int) -> NodeData | None:
        return SimpleNodeData()

    def set_in_data(self, data: NodeData | None, port_index: int) -> None:
        """Incoming data is ignored."""