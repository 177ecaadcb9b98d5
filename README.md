# nodeflow

This package provides node-graph models for data-flow programs, with no user interface. A node has
typed input and output ports. A connection (`ConnectionId`) links an output
port of one node to an input port of another. Node models recompute their
outputs when their inputs change, and they announce changes through small
`Signal` objects.

## Modules

- `nodeflow.definitions`: the core types.
  - `PortType`, `NodeRole`, `PortRole` and `ConnectionPolicy` enums.
  - The frozen `ConnectionId` dataclass. `get_node_id` and `get_port_index` read one end of a connection. `connection_to_json` and `connection_from_json` convert a connection to and from the JSON object form, which uses the keys `outNodeId`, `outPortIndex`, `intNodeId` and `inPortIndex`.
  - `NodeDataType` and the abstract `NodeData`.
  - `Signal`, with `connect`, `disconnect` and `emit`.
  - The abstract `NodeDelegateModel` base class for node behaviour. It has `caption`, `name`, `n_ports`, `data_type`, `out_data`, `set_in_data`, `save` and `load`, plus `data_updated` and `data_invalidated` signals.
- `nodeflow.simple_graph`: `SimpleGraphModel`, a graph of nodes that each have one input and one output port.
  - Nodes, connections and positions can be added, queried and deleted.
  - `save_node` and `load_node` convert a node to and from a JSON-ready dict.
- `nodeflow.dynamic_ports`: `DynamicPortsModel`, a graph whose nodes can gain and lose ports.
  - `add_port` and `remove_port` renumber the existing connections.
  - `save` and `load` handle the whole graph as a JSON-ready dict.
  - Each node has a `PortButtonPanel`, obtained with `widget(node_id)`. Its `click_plus` adds a port after the pressed group and its `click_minus` removes the pressed group's port.
- `nodeflow.calculator`: the arithmetic nodes.
  - `DecimalData`.
  - `NumberSourceDataModel`, which has `set_number`, `on_text_edited`, `save` and `load`.
  - `NumberDisplayDataModel`, which has `number()` and `display_text`.
  - `AdditionModel`, `SubtractionModel`, `MultiplicationModel` and `DivisionModel`. A division by zero produces no result.
- `nodeflow.sample_models`: smaller models.
  - `TextData`, with `TextSourceDataModel` and `TextDisplayDataModel`.
  - `MyNodeData`, `SimpleNodeData`, `NaiveDataModel`, `MyDataModel` and `SimpleDataModel`, which have fixed port layouts.
- `nodeflow.headless`: tools for running a saved calculator scene.
  - `ModelRegistry` holds model factories. It has `register_model`, `create` and `categories`.
  - `CalculatorScene` loads a saved scene with `load`. It passes output values along connections and gives access to each node's model through `delegate_model`.
  - `register_data_models()` returns a registry that holds all the calculator models.

## Installation

```
pip install .
```

## Command line

```
nodeflow-calculator
```

This command loads a built-in scene. In it, one number source feeds both inputs of an
addition node, and the result goes to a display node. The command enters 33.3 and then
-5 into the source and prints the result of the addition after each one.

## Use from Python

```python
from nodeflow.definitions import ConnectionId, NodeRole
from nodeflow.simple_graph import SimpleGraphModel

graph = SimpleGraphModel()
first = graph.add_node("")
second = graph.add_node("")
graph.set_node_data(first, NodeRole.POSITION, (0.0, 0.0))
graph.add_connection(ConnectionId(first, 0, second, 0))
print(graph.all_connection_ids(second))
```

You can also wire calculator nodes together directly:

```python
from nodeflow.calculator import AdditionModel, NumberDisplayDataModel, DecimalData

adder = AdditionModel()
display = NumberDisplayDataModel()
adder.set_in_data(DecimalData(2.0), 0)
adder.set_in_data(DecimalData(3.0), 1)
display.set_in_data(adder.out_data(0), 0)
print(display.number())  # 5.0
```

## What it does not do

The package has no graphical editor. It does not draw nodes or connections, and it
has no views, menus or file dialogs. Models hold their state in memory. The graph models and
`NumberSourceDataModel` produce and accept JSON-ready dicts, and reading or
writing files is left to the caller. `CalculatorScene` can load a scene but
cannot save one.

## Tests

```
pip install .[test]
pytest
```