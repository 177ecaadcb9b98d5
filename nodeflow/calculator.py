"""Arithmetic node models working on decimal numbers."""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass
from typing import Any

from .definitions import NodeData, NodeDataType, NodeDelegateModel, PortType

_OUT_PORT = 0


@dataclass(frozen=True)
class DecimalData(NodeData):
    """A floating point number carried between calculator nodes."""

    number: float = 0.0

    def type(self) -> NodeDataType:
        return NodeDataType("decimal", "Decimal")

    def number_as_text(self) -> str:
        """Fixed-point text with six decimals."""
        return f"{self.number:.6f}"


def _format_number(value: float) -> str:
    """Shortest general form with six significant digits."""
    return f"{value:.6g}"


def _parse_number(text: str) -> float | None:
    """Parse a decimal number, returning None when the text is not one."""
    stripped = text.strip()
    if not stripped or "_" in stripped:
        return None
    try:
        return float(stripped)
    except ValueError:
        return None


class MathOperationDataModel(NodeDelegateModel):
    """Two decimal inputs combined into one decimal output."""

    def __init__(self) -> None:
        super().__init__()
        self._number1: DecimalData | None = None
        self._number2: DecimalData | None = None
        self._result: DecimalData | None = None

    def n_ports(self, port_type: PortType) -> int:
        return 2 if port_type is PortType.IN else 1

    def data_type(self, port_type: PortType, port_index: int) -> NodeDataType:
        return DecimalData().type()

    def out_data(self, port_index: int) -> NodeData | None:
        return self._result

    def set_in_data(self, data: NodeData | None, port_index: int) -> None:
        number_data = data if isinstance(data, DecimalData) else None

        if data is None:
            self.data_invalidated.emit(_OUT_PORT)

        if port_index == 0:
            self._number1 = number_data
        else:
            self._number2 = number_data

        self.compute()

    @abstractmethod
    def compute(self) -> None:
        """Recalculate the output from the current inputs."""

    def _publish(self, result: float | None) -> None:
        self._result = None if result is None else DecimalData(result)
        self.data_updated.emit(_OUT_PORT)


def _operand_caption(
    port_type: PortType, port_index: int, first: str, second: str
) -> str:
    if port_type is PortType.IN:
        if port_index == 0:
            return first
        if port_index == 1:
            return second
        return ""
    if port_type is PortType.OUT:
        return "Result"
    return ""


class AdditionModel(MathOperationDataModel):
    """Sum of the two inputs."""

    def caption(self) -> str:
        return "Addition"

    def name(self) -> str:
        return "Addition"

    def compute(self) -> None:
        n1, n2 = self._number1, self._number2
        self._publish(n1.number + n2.number if n1 and n2 else None)


class SubtractionModel(MathOperationDataModel):
    """First input minus the second."""

    _port_captions_shown = True

    def caption(self) -> str:
        return "Subtraction"

    def name(self) -> str:
        return "Subtraction"

    def port_caption_visible(self, port_type: PortType, port_index: int) -> bool:
        """Every port of a subtraction shows its caption."""
        return self._port_captions_shown

    def port_caption(self, port_type: PortType, port_index: int) -> str:
        return _operand_caption(port_type, port_index, "Minuend", "Subtrahend")

    def compute(self) -> None:
        n1, n2 = self._number1, self._number2
        self._publish(n1.number - n2.number if n1 and n2 else None)


class MultiplicationModel(MathOperationDataModel):
    """Product of the two inputs."""

    def caption(self) -> str:
        return "Multiplication"

    def name(self) -> str:
        return "Multiplication"

    def compute(self) -> None:
        n1, n2 = self._number1, self._number2
        self._publish(n1.number * n2.number if n1 and n2 else None)


class DivisionModel(MathOperationDataModel):
    """First input divided by the second; no result for a zero divisor."""

    _port_captions_shown = True

    def caption(self) -> str:
        return "Division"

    def name(self) -> str:
        return "Division"

    def port_caption_visible(self, port_type: PortType, port_index: int) -> bool:
        """Every port of a division shows its caption."""
        return self._port_captions_shown

    def port_caption(self, port_type: PortType, port_index: int) -> str:
        return _operand_caption(port_type, port_index, "Dividend", "Divisor")

    def compute(self) -> None:
        n1, n2 = self._number1, self._number2
        if n2 is not None and n2.number == 0.0:
            self._publish(None)
        elif n1 and n2:
            self._publish(n1.number / n2.number)
        else:
            self._publish(None)


class NumberDisplayDataModel(NodeDelegateModel):
    """Sink node showing the decimal it receives."""

    def __init__(self) -> None:
        super().__init__()
        self._number_data: DecimalData | None = None
        self.display_text = ""

    def caption(self) -> str:
        return "Result"

    def caption_visible(self) -> bool:
        return False

    def name(self) -> str:
        return "Result"

    def n_ports(self, port_type: PortType) -> int:
        if port_type is PortType.OUT:
            return 0
        return 1

    def data_type(self, port_type: PortType, port_index: int) -> NodeDataType:
        return DecimalData().type()

    def out_data(self, port_index: int) -> NodeData | None:
        return None

    def set_in_data(self, data: NodeData | None, port_index: int) -> None:
        self._number_data = data if isinstance(data, DecimalData) else None
        self.display_text = (
            self._number_data.number_as_text() if self._number_data else ""
        )

    def number(self) -> float:
        """The displayed number, or 0.0 when nothing is shown."""
        return self._number_data.number if self._number_data else 0.0


class NumberSourceDataModel(NodeDelegateModel):
    """Source node producing a user-entered decimal."""

    def __init__(self) -> None:
        super().__init__()
        self._number = DecimalData(0.0)

    def caption(self) -> str:
        return "Number Source"

    def caption_visible(self) -> bool:
        return False

    def name(self) -> str:
        return "NumberSource"

    def save(self) -> dict[str, Any]:
        model_json = super().save()
        model_json["number"] = _format_number(self._number.number)
        return model_json

    def load(self, data: dict[str, Any]) -> None:
        if "number" not in data:
            return
        value = data["number"]
        text = value if isinstance(value, str) else ""
        number = _parse_number(text)
        if number is not None:
            self._number = DecimalData(number)

    def n_ports(self, port_type: PortType) -> int:
        if port_type is PortType.IN:
            return 0
        return 1

    def data_type(self, port_type: PortType, port_index: int) -> NodeDataType:
        return DecimalData().type()

    def out_data(self, port_index: int) -> NodeData | None:
        return self._number

    def set_in_data(self, data: NodeData | None, port_index: int) -> None:
        """A source has no inputs; incoming data is ignored."""

    def set_number(self, number: float) -> None:
        self._number = DecimalData(float(number))
        self.data_updated.emit(_OUT_PORT)

    def on_text_edited(self, text: str) -> None:
        """Take a new number from edited text, or invalidate the output."""
        number = _parse_number(text)
        if number is None:
            self.data_invalidated.emit(_OUT_PORT)
        else:
            self._number = DecimalData(number)
            self.data_updated.emit(_OUT_PORT)