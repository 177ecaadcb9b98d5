"""A graph model whose nodes gain and lose ports at run time."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from .definitions import (
    ConnectionId,
    ConnectionPolicy,
    NodeRole,
    PortRole,
    PortType,
    Signal,
    connection_from_json,
    connection_to_json,
    get_node_id,
    get_port_index,
)


@dataclass
class _NodeGeometry:
    size: tuple[float, float] | None = None
    pos: tuple[float, float] = (0.0, 0.0)


@dataclass
class _NodePortCount:
    in_: int = 0
    out: int = 0


def _parse_count(value: Any) -> int:
    """Read an unsigned port count stored as text; anything else reads as 0."""
    text = value.strip() if isinstance(value, str) else ""
    return int(text) if text.isdigit() else 0


def _is_input(port_type: PortType) -> bool:
    return port_type is PortType.IN


class PortButtonPanel:
    """Per-node panel of "+"/"-" button groups, one group per port on each side.

    Pressing "+" inserts a port right after the pressed group; pressing "-"
    removes the port of the pressed group.
    """

    def __init__(self, node_id: int, model: DynamicPortsModel) -> None:
        self._node_id = node_id
        self._model = model
        self._left = 0
        self._right = 0

    def _side_count(self, port_type: PortType) -> int:
        return self._left if _is_input(port_type) else self._right

    def _set_side_count(self, port_type: PortType, count: int) -> None:
        if _is_input(port_type):
            self._left = count
        else:
            self._right = count

    def count(self, port_type: PortType) -> int:
        """Number of button groups on the side of the given port type."""
        return self._side_count(port_type)

    def populate_buttons(self, port_type: PortType, n_ports: int) -> None:
        """Add or remove button groups until the side holds n_ports of them."""
        self._set_side_count(port_type, max(0, int(n_ports)))

    def _check_index(self, port_type: PortType, port_index: int) -> None:
        if not 0 <= port_index < self._side_count(port_type):
            raise IndexError(f"no button group at index {port_index} on {port_type.name}")

    def click_plus(self, port_type: PortType, port_index: int) -> None:
        """Press the "+" button of a group: add a port after it."""
        self._check_index(port_type, port_index)
        self._set_side_count(port_type, self._side_count(port_type) + 1)
        self._model.add_port(self._node_id, port_type, port_index + 1)

    def click_minus(self, port_type: PortType, port_index: int) -> None:
        """Press the "-" button of a group: remove its port."""
        self._check_index(port_type, port_index)
        self._set_side_count(port_type, self._side_count(port_type) - 1)
        self._model.remove_port(self._node_id, port_type, port_index)


class DynamicPortsModel:
    """Graph of nodes whose input and output port counts may change."""

    def __init__(self) -> None:
        self._node_ids: set[int] = set()
        self._connectivity: set[ConnectionId] = set()
        self._geometry: dict[int, _NodeGeometry] = {}
        self._port_counts: dict[int, _NodePortCount] = {}
        self._widgets: dict[int, PortButtonPanel] = {}
        self._next_node_id = 0

        self.node_created = Signal()
        self.node_deleted = Signal()
        self.node_updated = Signal()
        self.node_position_updated = Signal()
        self.connection_created = Signal()
        self.connection_deleted = Signal()

    def _geometry_of(self, node_id: int) -> _NodeGeometry:
        return self._geometry.setdefault(node_id, _NodeGeometry())

    def _counts_of(self, node_id: int) -> _NodePortCount:
        return self._port_counts.setdefault(node_id, _NodePortCount())

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
        return not self.connection_exists(connection_id)

    def add_connection(self, connection_id: ConnectionId) -> None:
        self._connectivity.add(connection_id)
        self.connection_created.emit(connection_id)

    def node_exists(self, node_id: int) -> bool:
        return node_id in self._node_ids

    def widget(self, node_id: int) -> PortButtonPanel:
        """The node's button panel, created on first request."""
        panel = self._widgets.get(node_id)
        if panel is None:
            panel = self._widgets[node_id] = PortButtonPanel(node_id, self)
        return panel

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
        if role is NodeRole.IN_PORT_COUNT:
            return self._counts_of(node_id).in_
        if role is NodeRole.OUT_PORT_COUNT:
            return self._counts_of(node_id).out
        if role is NodeRole.WIDGET:
            return self.widget(node_id)
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
        if role is NodeRole.IN_PORT_COUNT:
            count = int(value)
            self._counts_of(node_id).in_ = count
            self.widget(node_id).populate_buttons(PortType.IN, count)
        elif role is NodeRole.OUT_PORT_COUNT:
            count = int(value)
            self._counts_of(node_id).out = count
            self.widget(node_id).populate_buttons(PortType.OUT, count)
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
        return False

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
        self._port_counts.pop(node_id, None)
        self._widgets.pop(node_id, None)
        self.node_deleted.emit(node_id)
        return True

    def save_node(self, node_id: int) -> dict[str, Any]:
        x, y = self.node_data(node_id, NodeRole.POSITION)
        counts = self._counts_of(node_id)
        return {
            "id": node_id,
            "position": {"x": x, "y": y},
            "inPortCount": str(counts.in_),
            "outPortCount": str(counts.out),
        }

    def save(self) -> dict[str, Any]:
        """The whole graph as a JSON-ready object."""
        ordered = sorted(
            self._connectivity,
            key=lambda c: (c.out_node_id, c.out_port_index, c.in_node_id, c.in_port_index),
        )
        return {
            "nodes": [self.save_node(node_id) for node_id in sorted(self._node_ids)],
            "connections": [connection_to_json(cid) for cid in ordered],
        }

    def load_node(self, node_json: dict[str, Any]) -> None:
        restored_id = int(node_json.get("id", 0))
        self._next_node_id = max(self._next_node_id, restored_id + 1)
        self._node_ids.add(restored_id)

        self.set_node_data(
            restored_id, NodeRole.IN_PORT_COUNT, _parse_count(node_json.get("inPortCount"))
        )
        self.set_node_data(
            restored_id, NodeRole.OUT_PORT_COUNT, _parse_count(node_json.get("outPortCount"))
        )

        position = node_json.get("position", {})
        pos = (float(position.get("x", 0.0)), float(position.get("y", 0.0)))
        self.set_node_data(restored_id, NodeRole.POSITION, pos)

        self.node_created.emit(restored_id)

    def load(self, data: dict[str, Any]) -> None:
        """Restore nodes and connections from an object made by save()."""
        for node_json in data.get("nodes", []):
            self.load_node(node_json)
        for conn_json in data.get("connections", []):
            self.add_connection(connection_from_json(conn_json))

    def _connections_on_side(self, node_id: int, port_type: PortType) -> list[ConnectionId]:
        return [cid for cid in self._connectivity if get_node_id(port_type, cid) == node_id]

    @staticmethod
    def _with_port_index(
        cid: ConnectionId, port_type: PortType, index: int
    ) -> ConnectionId:
        if port_type is PortType.IN:
            return replace(cid, in_port_index=index)
        return replace(cid, out_port_index=index)

    def _relink(self, moves: list[tuple[ConnectionId, ConnectionId | None]]) -> None:
        """Delete every old connection, then create the surviving new ones."""
        for old, _ in moves:
            self.delete_connection(old)
        for _, new in moves:
            if new is not None:
                self.add_connection(new)

    def add_port(self, node_id: int, port_type: PortType, port_index: int) -> None:
        """Insert a port at port_index, shifting later connections down by one."""
        if port_type is PortType.NONE:
            raise ValueError("a port must be an input or an output")
        moves = [
            (cid, self._with_port_index(cid, port_type, get_port_index(port_type, cid) + 1))
            for cid in self._connections_on_side(node_id, port_type)
            if get_port_index(port_type, cid) >= port_index
        ]
        for old, _ in moves:
            self.delete_connection(old)

        counts = self._counts_of(node_id)
        if _is_input(port_type):
            counts.in_ += 1
        else:
            counts.out += 1

        for _, new in moves:
            if new is not None:
                self.add_connection(new)
        self.node_updated.emit(node_id)

    def remove_port(self, node_id: int, port_type: PortType, port_index: int) -> None:
        """Remove the port at port_index with its connections; later ones shift up."""
        if port_type is PortType.NONE:
            raise ValueError("a port must be an input or an output")
        counts = self._counts_of(node_id)
        current = counts.in_ if _is_input(port_type) else counts.out
        if current == 0:
            raise ValueError(f"node {node_id} has no {port_type.name} port to remove")

        moves: list[tuple[ConnectionId, ConnectionId | None]] = []
        for cid in self._connections_on_side(node_id, port_type):
            index = get_port_index(port_type, cid)
            if index == port_index:
                moves.append((cid, None))
            elif index > port_index:
                moves.append((cid, self._with_port_index(cid, port_type, index - 1)))
        for old, _ in moves:
            self.delete_connection(old)

        if _is_input(port_type):
            counts.in_ -= 1
        else:
            counts.out -= 1

        for _, new in moves:
            if new is not None:
                self.add_connection(new)
        self.node_updated.emit(node_id)

    def new_node_id(self) -> int:
        node_id = self._next_node_id
        self._next_node_id += 1
        return node_id