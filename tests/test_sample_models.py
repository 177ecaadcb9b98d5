import pytest

from nodeflow.definitions import NodeDataType, PortType
from nodeflow.sample_models import (
    MyDataModel,
    MyNodeData,
    NaiveDataModel,
    SimpleDataModel,
    SimpleNodeData,
    TextData,
    TextDisplayDataModel,
    TextSourceDataModel,
)


def test_text_data_type():
    assert TextData("abc").type() == NodeDataType("text", "Text")
    assert TextData("abc").text == "abc"


def test_text_source_defaults():
    model = TextSourceDataModel()
    assert model.out_data(0) == TextData("Default Text")
    assert model.name() == "TextSourceDataModel"
    assert model.caption() == "Text Source"
    assert model.caption_visible() is False


def test_text_source_ports():
    model = TextSourceDataModel()
    assert model.n_ports(PortType.IN) == 0
    assert model.n_ports(PortType.OUT) == 1
    assert model.data_type(PortType.OUT, 0) == TextData().type()


def test_text_source_edit_emits_update():
    model = TextSourceDataModel()
    seen = []
    model.data_updated.connect(seen.append)
    model.on_text_edited("hello")
    assert seen == [0]
    assert model.out_data(0) == TextData("hello")


def test_text_display_receives_and_clears():
    display = TextDisplayDataModel()
    assert display.display_text == "Resulting Text"
    display.set_in_data(TextData("shown"), 0)
    assert display.display_text == "shown"
    display.set_in_data(None, 0)
    assert display.display_text == ""
    display.set_in_data(MyNodeData(), 0)
    assert display.display_text == ""


def test_text_display_ports():
    display = TextDisplayDataModel()
    assert display.n_ports(PortType.IN) == 1
    assert display.n_ports(PortType.OUT) == 0
    assert display.n_ports(PortType.NONE) == 1
    assert display.out_data(0) is None
    assert display.name() == "TextDisplayDataModel"


def test_source_to_display_round_trip():
    source = TextSourceDataModel()
    display = TextDisplayDataModel()
    source.data_updated.connect(lambda port: display.set_in_data(source.out_data(port), 0))
    source.on_text_edited("flowing")
    assert display.display_text == "flowing"


def test_marker_data_types():
    assert MyNodeData().type() == NodeDataType("MyNodeData", "My Node Data")
    assert SimpleNodeData().type() == NodeDataType("SimpleData", "Simple Data")


@pytest.mark.parametrize("port_type", [PortType.IN, PortType.OUT])
def test_naive_model_port_types(port_type):
    model = NaiveDataModel()
    assert model.n_ports(port_type) == 2
    assert model.data_type(port_type, 0) == MyNodeData().type()
    assert model.data_type(port_type, 1) == SimpleNodeData().type()
    assert model.data_type(port_type, 2) == NodeDataType()


def test_naive_model_none_side():
    model = NaiveDataModel()
    assert model.n_ports(PortType.NONE) == 1
    assert model.data_type(PortType.NONE, 0) == NodeDataType()


def test_naive_model_out_data():
    model = NaiveDataModel()
    assert isinstance(model.out_data(0), MyNodeData)
    assert isinstance(model.out_data(1), SimpleNodeData)
    assert model.name() == "NaiveDataModel"


def test_my_data_model():
    model = MyDataModel()
    assert model.save() == {"name": "MyDataModel"}
    assert model.n_ports(PortType.IN) == 3
    assert model.n_ports(PortType.OUT) == 3
    assert model.data_type(PortType.IN, 2) == MyNodeData().type()
    assert isinstance(model.out_data(1), MyNodeData)


def test_simple_data_model():
    model = SimpleDataModel()
    assert model.n_ports(PortType.IN) == 2
    assert model.n_ports(PortType.OUT) == 2
    assert model.data_type(PortType.OUT, 1) == SimpleNodeData().type()
    assert isinstance(model.out_data(0), SimpleNodeData)
    assert model.caption() == "Simple Data Model"