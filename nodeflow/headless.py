"""Running a calculator data-flow graph without any user interface."""

from __future__ import annotations

import json
from collections import defaultdict
from typing import Any, Callable

from .calculator import (
    AdditionModel,
    DivisionModel,
    MultiplicationModel,
    NumberDisplayDataModel,
    NumberSourceDataModel,
    SubtractionModel,
)
from .definitions import ConnectionId, NodeDelegateModel, PortType, connection_from_json

ModelFactory = Callable[[], NodeDelegateModel]

DEFAULT_CATEGORY = "Nodes"

# Saved scene: one source feeding both inputs of an addition, shown by a display.
ADDING_NUMBERS_SCENE = """
{
    "nodes": [
        {"id": 0,
         "internal-data": {"model-name": "NumberSource", "number": "3"},
         "position": {"x": -338, "y": -160}},
        {"id": 1,
         "internal-data": {"model-name": "Addition"},
         "position": {"x": -31, "y": -264}},
        {"id": 2,
         "internal-data": {"model-name": "Result"},
         "position": {"x": 201, "y": -129}}
    ],
    "connections": [
        {"inPortIndex": 0, "intNodeId": 2, "outNodeId": 1, "outPortIndex": 0},
        {"inPortIndex": 1, "intNodeId": 1, "outNodeId": 0, "outPortIndex": 0},
        {"inPortIndex": 0, "intNodeId": 1, "outNodeId": 0, "outPortIndex": 0}
    ]
}
"""


class ModelRegistry:
    """Factories of node models, keyed by model name and grouped in categories."""

    def __init__(self) -> None:
        self._factories: dict[str, ModelFactory] = {}
        self._categories: dict[str, str] = {}

    def register_model(self, factory: ModelFactory, category: str = DEFAULT_CATEGORY) -> None:
        """Register a factory under the name of the model it makes.

        A name already registered keeps its first factory.
        """
        name = factory().name()
        if name in self._factories:
            return
        self._factories[name] = factory
        self._categories[name] = category

    def create(self, name: str) -> NodeDelegateModel:
        """Make a new model; raises KeyError for an unknown name."""
        try:
            factory = self._factories[name]
        except KeyError:
            raise KeyError(f"no model registered under {name!r}") from None
        return factory()

    def categories(self) -> set[str]:
        return set(self._categories.values())


class CalculatorScene:
    """A data-flow graph of delegate models that propagates output values."""

    def __init__(self, registry: ModelRegistry) -> None:
        self._registry = registry
        self._models: dict[int, NodeDelegateModel] = {}
        self._outgoing: dict[tuple[int, int], list[ConnectionId]] = defaultdict(list)

    def _add_node(self, node_id: int, model: NodeDelegateModel) -> None:
        self._models[node_id] = model
        model.data_updated.connect(
            lambda port_index: self._on_out_port_data_updated(node_id, port_index)
        )

    def _on_out_port_data_updated(self, node_id: int, port_index: int) -> None:
        data = self._models[node_id].out_data(port_index)
        for cid in list(self._outgoing[(node_id, port_index)]):
            self._models[cid.in_node_id].set_in_data(data, cid.in_port_index)

    def _add_connection(self, connection_id: ConnectionId) -> None:
        source = self.delegate_model(connection_id.out_node_id)
        target = self.delegate_model(connection_id.in_node_id)
        if not 0 <= connection_id.out_port_index < source.n_ports(PortType.OUT):
            raise ValueError(f"invalid output port in {connection_id}")
        if not 0 <= connection_id.in_port_index < target.n_ports(PortType.IN):
            raise ValueError(f"invalid input port in {connection_id}")
        key = (connection_id.out_node_id, connection_id.out_port_index)
        self._outgoing[key].append(connection_id)
        target.set_in_data(
            source.out_data(connection_id.out_port_index), connection_id.in_port_index
        )

    def load(self, scene: dict[str, Any]) -> None:
        """Create the nodes and connections of a saved scene."""
        for node_json in scene.get("nodes", []):
            node_id = int(node_json["id"])
            internal = node_json.get("internal-data", {})
            model = self._registry.create(internal.get("model-name", ""))
            model.load(internal)
            self._add_node(node_id, model)
        for conn_json in scene.get("connections", []):
            self._add_connection(connection_from_json(conn_json))

    def delegate_model(self, node_id: int) -> NodeDelegateModel:
        """The model behind a node; raises KeyError for an unknown id."""
        try:
            return self._models[node_id]
        except KeyError:
            raise KeyError(f"no node with id {node_id}") from None


def register_data_models() -> ModelRegistry:
    """A registry holding all calculator models."""
    registry = ModelRegistry()
    registry.register_model(NumberSourceDataModel, "Sources")
    registry.register_model(NumberDisplayDataModel, "Displays")
    registry.register_model(AdditionModel, "Operators")
    registry.register_model(SubtractionModel, "Operators")
    registry.register_model(MultiplicationModel, "Operators")
    registry.register_model(DivisionModel, "Operators")
    return registry


def main(argv: list[str] | None = None) -> int:
    """Load the sample addition scene, feed it numbers and print the results."""
    scene = CalculatorScene(register_data_models())
    scene.load(json.loads(ADDING_NUMBERS_SCENE))
    print("Data Flow graph was created from a json-serialized graph")

    node_source, node_result = 0, 2
    source = scene.delegate_model(node_source)
    result = scene.delegate_model(node_result)
    assert isinstance(source, NumberSourceDataModel)
    assert isinstance(result, NumberDisplayDataModel)

    for number in (33.3, -5.0):
        print("=" * 40)
        print(f"Entering the number {number:g} to the input node")
        source.set_number(number)
        print(f"Result of the addition operation: {result.number():g}")
    return 0