import pytest

from nodeflow.definitions import (
    ConnectionId,
    NodeData,
    NodeDataType,
    NodeDelegateModel,
    PortType,
    Signal,
    connection_from_json,
    connection_to_json,
    get_node_id,
    get_port_index,
)


class _StubModel(NodeDelegateModel):
    def caption(self):
        return "caption"

    def name(self):
        return "name"

    def n_ports(self, port_type):
        return 0

    def data_type(self, port_type, port_index):
        return NodeDataType()

    def out_data(self, port_index):
        return None

    def set_in_data(self, data, port_index):
        pass


CID = ConnectionId(out_node_id=7, out_port_index=2, in_node_id=9, in_port_index=4)


def test_get_node_id_each_side():
    assert get_node_id(PortType.IN, CID) == 9
    assert get_node_id(PortType.OUT, CID) == 7


def test_get_port_index_each_side():
    assert get_port_index(PortType.IN, CID) == 4
    assert get_port_index(PortType.OUT, CID) == 2


@pytest.mark.parametrize("func", [get_node_id, get_port_index])
def test_none_port_type_rejected(func):
    with pytest.raises(ValueError):
        func(PortType.NONE, CID)


def test_connection_json_keys_match_scene_format():
    data = connection_to_json(CID)
    assert data == {"outNodeId": 7, "outPortIndex": 2, "intNodeId": 9, "inPortIndex": 4}


def test_connection_json_round_trip():
    assert connection_from_json(connection_to_json(CID)) == CID


def test_connection_from_scene_json():
    cid = connection_from_json(
        {"inPortIndex": 1, "intNodeId": 1, "outNodeId": 0, "outPortIndex": 0}
    )
    assert cid == ConnectionId(0, 0, 1, 1)


def test_connection_id_hashable_and_equal():
    assert len({ConnectionId(1, 0, 2, 0), ConnectionId(1, 0, 2, 0)}) == 1


def test_node_data_type_equality():
    assert NodeDataType("decimal", "Decimal") == NodeDataType("decimal", "Decimal")
    assert NodeDataType() == NodeDataType("", "")


def test_node_data_is_abstract():
    with pytest.raises(TypeError):
        NodeData()


def test_delegate_model_is_abstract():
    with pytest.raises(TypeError):
        NodeDelegateModel()


def test_signal_emit_and_disconnect():
    received = []
    signal = Signal()
    signal.connect(received.append)
    signal.emit(5)
    signal.disconnect(received.append)
    signal.emit(6)
    assert received == [5]


def test_signal_disconnect_unknown_slot():
    with pytest.raises(ValueError):
        Signal().disconnect(print)


def test_delegate_model_defaults():
    model = _StubModel()
    assert NodeDelegateModel.caption_visible(model) is True
    assert NodeDelegateModel.port_caption_visible(model, PortType.IN, 0) is False
    assert NodeDelegateModel.port_caption(model, PortType.OUT, 0) == ""


def test_delegate_model_save_holds_name():
    model = _StubModel()
    assert NodeDelegateModel.save(model) == {"model-name": "name"}


def test_delegate_model_signals_fire():
    model = _StubModel()
    seen = []
    Signal.connect(model.data_updated, lambda idx: seen.append(("u", idx)))
    Signal.connect(model.data_invalidated, lambda idx: seen.append(("i", idx)))
    Signal.emit(model.data_updated, 0)
    Signal.emit(model.data_invalidated, 0)
    assert seen == [("u", 0), ("i", 0)]