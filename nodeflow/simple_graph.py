"""A minimal graph model holding nodes, positions and connections."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .definitions import (
    ConnectionId,
    ConnectionPolicy,
    NodeRole,
    PortRole,
    PortType,
    Signal,
    get_node_id,
    get_port_index,
)


@dataclass
class NodeGeometry:
    """Size and position of a node; size is None until set."""

    size: tuple[float, float] | None = None
    pos: tuple[float, float] = (0.0, 0.0)


class SimpleGraphModel:
    """Graph of nodes with one input and one output port each."""

    # Port roles this model lets callers change; none are writable.
    _WRITABLE_PORT_ROLES: frozenset[PortRole] = frozenset()

    def __init__(self) -> None:
        self._node_ids: set[int] = set()
        self._connectivity: set[ConnectionId] = set()
        self._geometry: dict[int, NodeGeometry] = {}
        self._next_node_id = 0

        self.node_created = Signal()
        self.node_deleted = Signal()
        self.node_position_updated = Signal()
        self.connection_created = Signal()
        self.connection_deleted = Signal()

    def _geometry_of(self, node_id: int) -> NodeGeometry:
        return self._geometry.setdefault(node_id, NodeGeometry())

    def all_node_ids(self) -> set[int]:
        return set(self._node_ids)

    def all_connection_ids(self, node_id: int) -> set[ConnectionId]:
        return {
            cid
            for cid in self._connectivity
            if node_id in (cid.in_node_id, cid.out_node_id)
        }

    def connections(
        self, node_id: int, port_type: PortType, port_index: int
    ) -> set[ConnectionId]:
        return {
            cid
            for cid in self._connectivity
            if get_node_id(port_type, cid) == node_id
            and get_port_index(port_type, cid) == port_index
        }

    def connection_exists(self, connection_id: ConnectionId) -> bool:
        return connection_id in self._connectivity

    def add_node(self, node_type: str = "") -> int:
        new_id = self.new_node_id()
        self._node_ids.add(new_id)
        self.node_created.emit(new_id)
        return new_id

    def connection_possible(self, connection_id: ConnectionId) -> bool:
        return connection_id not in self._connectivity

    def add_connection(self, connection_id: ConnectionId) -> None:
        self._connectivity.add(connection_id)
        self.connection_created.emit(connection_id)

    def node_exists(self, node_id: int) -> bool:
        return node_id in self._node_ids

    def node_data(self, node_id: int, role: NodeRole) -> Any:
        if role is NodeRole.TYPE:
            return "Default Node Type"
        if role is NodeRole.POSITION:
            return self._geometry_of(node_id).pos
        if role is NodeRole.SIZE:
            return self._geometry_of(node_id).size
        if role is NodeRole.CAPTION_VISIBLE:
            return True
        if role is NodeRole.CAPTION:
            return "Node"
        if role in (NodeRole.IN_PORT_COUNT, NodeRole.OUT_PORT_COUNT):
            return 1
        return None

    def set_node_data(self, node_id: int, role: NodeRole, value: Any) -> bool:
        if role is NodeRole.POSITION:
            x, y = value
            self._geometry_of(node_id).pos = (float(x), float(y))
            self.node_position_updated.emit(node_id)
            return True
        if role is NodeRole.SIZE:
            width, height = value
            self._geometry_of(node_id).size = (width, height)
            return True
        return False

    def port_data(
        self, node_id: int, port_type: PortType, port_index: int, role: PortRole
    ) -> Any:
        if role is PortRole.CONNECTION_POLICY:
            return ConnectionPolicy.ONE
        if role is PortRole.CAPTION_VISIBLE:
            return True
        if role is PortRole.CAPTION:
            return "Port In" if port_type is PortType.IN else "Port Out"
        return None

    def set_port_data(
        self,
        node_id: int,
        port_type: PortType,
        port_index: int,
        value: Any,
        role: PortRole = PortRole.DATA,
    ) -> bool:
        """Report whether the port role accepts a value; no role does here."""
        return role in self._WRITABLE_PORT_ROLES

    def delete_connection(self, connection_id: ConnectionId) -> bool:
        if connection_id not in self._connectivity:
            return False
        self._connectivity.discard(connection_id)
        self.connection_deleted.emit(connection_id)
        return True

    def delete_node(self, node_id: int) -> bool:
        for cid in self.all_connection_ids(node_id):
            self.delete_connection(cid)
        self._node_ids.discard(node_id)
        self._geometry.pop(node_id, None)
        self.node_deleted.emit(node_id)
        return True

    def save_node(self, node_id: int) -> dict[str, Any]:
        x, y = self.node_data(node_id, NodeRole.POSITION)
        return {"id": node_id, "position": {"x": x, "y": y}}

    def load_node(self, node_json: dict[str, Any]) -> None:
        restored_id = int(node_json.get("id", 0))
        # The next id must exceed every id present in the graph.
        self._next_node_id = max(self._next_node_id, restored_id + 1)
        self._node_ids.add(restored_id)
        self.node_created.emit(restored_id)

        position = node_json.get("position", {})
        pos = (float(position.get("x", 0.0)), float(position.get("y", 0.0)))
        self.set_node_data(restored_id, NodeRole.POSITION, pos)

    def new_node_id(self) -> int:
        node_id = self._next_node_id
        self._next_node_id += 1
        return node_id