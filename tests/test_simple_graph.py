import pytest

from nodeflow.definitions import (
    ConnectionId,
    ConnectionPolicy,
    NodeRole,
    PortRole,
    PortType,
)
from nodeflow.simple_graph import NodeGeometry, SimpleGraphModel


@pytest.fixture
def two_nodes():
    model = SimpleGraphModel()
    id1 = model.add_node()
    model.set_node_data(id1, NodeRole.POSITION, (0, 0))
    id2 = model.add_node()
    model.set_node_data(id2, NodeRole.POSITION, (300, 300))
    cid = ConnectionId(id1, 0, id2, 0)
    model.add_connection(cid)
    return model, id1, id2, cid


def test_node_ids_are_unique_and_present(two_nodes):
    model, id1, id2, _ = two_nodes
    assert id1 != id2
    assert model.all_node_ids() == {id1, id2}
    assert model.node_exists(id1) and model.node_exists(id2)


def test_connection_lookup(two_nodes):
    model, id1, id2, cid = two_nodes
    assert model.connection_exists(cid)
    assert model.all_connection_ids(id1) == {cid}
    assert model.connections(id2, PortType.IN, 0) == {cid}
    assert model.connections(id2, PortType.OUT, 0) == set()


def test_connection_possible_only_when_absent(two_nodes):
    model, id1, id2, cid = two_nodes
    assert model.connection_possible(cid) is False
    assert model.connection_possible(ConnectionId(id2, 0, id1, 0)) is True


def test_delete_connection(two_nodes):
    model, _, _, cid = two_nodes
    deleted = []
    model.connection_deleted.connect(deleted.append)
    assert model.delete_connection(cid) is True
    assert model.delete_connection(cid) is False
    assert deleted == [cid]


def test_delete_node_removes_its_connections(two_nodes):
    model, id1, id2, cid = two_nodes
    assert model.delete_node(id1) is True
    assert not model.node_exists(id1)
    assert not model.connection_exists(cid)
    assert model.all_node_ids() == {id2}


def test_fixed_node_roles(two_nodes):
    model, id1, _, _ = two_nodes
    assert model.node_data(id1, NodeRole.TYPE) == "Default Node Type"
    assert model.node_data(id1, NodeRole.CAPTION) == "Node"
    assert model.node_data(id1, NodeRole.CAPTION_VISIBLE) is True
    assert model.node_data(id1, NodeRole.IN_PORT_COUNT) == model.node_data(
        id1, NodeRole.OUT_PORT_COUNT
    )


def test_position_and_size(two_nodes):
    model, _, id2, _ = two_nodes
    assert model.node_data(id2, NodeRole.POSITION) == (300.0, 300.0)
    assert model.set_node_data(id2, NodeRole.SIZE, (40, 30)) is True
    assert model.node_data(id2, NodeRole.SIZE) == (40, 30)


def test_unsupported_roles_not_set(two_nodes):
    model, id1, _, _ = two_nodes
    assert model.set_node_data(id1, NodeRole.CAPTION, "x") is False
    assert model.node_data(id1, NodeRole.CAPTION) == "Node"


def test_port_data(two_nodes):
    model, id1, _, _ = two_nodes
    assert model.port_data(id1, PortType.IN, 0, PortRole.CAPTION) == "Port In"
    assert model.port_data(id1, PortType.OUT, 0, PortRole.CAPTION) == "Port Out"
    assert (
        model.port_data(id1, PortType.IN, 0, PortRole.CONNECTION_POLICY)
        is ConnectionPolicy.ONE
    )
    assert model.port_data(id1, PortType.IN, 0, PortRole.DATA) is None
    assert model.set_port_data(id1, PortType.IN, 0, 5, PortRole.DATA) is False


def test_save_load_round_trip(two_nodes):
    model, _, id2, _ = two_nodes
    saved = model.save_node(id2)
    restored = SimpleGraphModel()
    restored.load_node(saved)
    assert restored.all_node_ids() == {id2}
    assert restored.save_node(id2) == saved


def test_load_advances_next_id():
    model = SimpleGraphModel()
    model.load_node({"id": 5, "position": {"x": 1.5, "y": -2}})
    new_id = model.add_node()
    assert new_id > 5
    assert model.node_data(5, NodeRole.POSITION) == (1.5, -2.0)


def test_signals_on_add_and_move():
    model = SimpleGraphModel()
    created, moved = [], []
    model.node_created.connect(created.append)
    model.node_position_updated.connect(moved.append)
    node = model.add_node()
    model.set_node_data(node, NodeRole.POSITION, (3, 4))
    assert created == [node]
    assert moved == [node]


def test_geometry_defaults():
    geom = NodeGeometry()
    assert geom.pos == (0.0, 0.0)
    assert geom.size is None