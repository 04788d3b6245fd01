"""Tests for the GEXF adapter."""

from __future__ import annotations

import pytest

from graphlens.adapters import GexfAdapter, load_graph
from graphlens.errors import FormatError, ValidationError
from graphlens.graph.attributes import AttributeKind
from graphlens.graph.store import GraphStore

GEXF = """<gexf xmlns="http://gexf.net/1.3" version="1.3">
  <graph defaultedgetype="directed">
    <attributes class="node">
      <attribute id="0" title="population" type="integer"/>
      <attribute id="1" title="capital" type="boolean"/>
    </attributes>
    <attributes class="edge">
      <attribute id="0" title="kind" type="string"/>
    </attributes>
    <nodes>
      <node id="n0" label="Lisbon">
        <attvalues>
          <attvalue for="0" value="545000"/>
          <attvalue for="1" value="true"/>
        </attvalues>
      </node>
      <node id="n1" label="Porto"/>
      <node id="n2"/>
    </nodes>
    <edges>
      <edge id="e0" source="n0" target="n1" weight="2.5">
        <attvalues><attvalue for="0" value="rail"/></attvalues>
      </edge>
      <edge id="e1" source="n1" target="n2"/>
    </edges>
  </graph>
</gexf>
"""


def test_parses_nodes_edges_and_weights(write_file) -> None:
    """Labels name vertices; missing weights default to 1."""
    payload = GexfAdapter().parse(source=write_file("graph.gexf", GEXF))

    assert payload.names == ["Lisbon", "Porto", "n2"]
    assert payload.edges == [(0, 1), (1, 2)]
    assert payload.weights == [2.5, 1.0]
    assert payload.directed is True


def test_typed_attributes_are_installed(write_file, store: GraphStore) -> None:
    """Declared attributes keep their kind in the installed graph."""
    load_graph(store, "gexf", source=write_file("graph.gexf", GEXF))
    graph = store.current

    assert graph.vertex_attributes.kind("population") is AttributeKind.NUMERIC
    assert graph.vertex_attributes.row(0) == {"population": 545000.0, "capital": True}
    assert graph.vertex_attributes.row(1) == {}
    assert graph.edge_attributes.get("kind", 0) == "rail"
    assert graph.edge_attributes.get("kind", 1) is None


def test_undirected_by_default(write_file) -> None:
    """Without defaultedgetype the graph is undirected."""
    text = GEXF.replace(' defaultedgetype="directed"', "")
    payload = GexfAdapter().parse(source=write_file("graph.gexf", text))
    assert payload.directed is False


def test_duplicate_label(write_file) -> None:
    """Two nodes with the same label are rejected."""
    text = GEXF.replace('label="Porto"', 'label="Lisbon"')
    with pytest.raises(ValidationError, match="Duplicate node label 'Lisbon'"):
        GexfAdapter().parse(source=write_file("graph.gexf", text))


def test_duplicate_id(write_file) -> None:
    """Node ids must be unique."""
    text = GEXF.replace('<node id="n2"/>', '<node id="n1" label="Faro"/>')
    with pytest.raises(ValidationError, match="Duplicate node id 'n1'"):
        GexfAdapter().parse(source=write_file("graph.gexf", text))


def test_unknown_edge_endpoint(write_file) -> None:
    """Edges must reference declared node ids."""
    text = GEXF.replace('target="n2"', 'target="n9"')
    with pytest.raises(ValidationError, match="Invalid node in edge: n1 -> n9"):
        GexfAdapter().parse(source=write_file("graph.gexf", text))


def test_undeclared_attvalue(write_file) -> None:
    """attvalues must refer to a declared attribute."""
    text = GEXF.replace('<attvalue for="1" value="true"/>', '<attvalue for="7" value="x"/>')
    with pytest.raises(FormatError, match="undeclared attribute '7'"):
        GexfAdapter().parse(source=write_file("graph.gexf", text))


def test_malformed_xml(write_file) -> None:
    """Broken XML is a format error."""
    with pytest.raises(FormatError):
        GexfAdapter().parse(source=write_file("broken.gexf", "<gexf><graph>"))


def test_wrong_root(write_file) -> None:
    """The root element must be gexf."""
    with pytest.raises(FormatError, match="Missing <gexf>"):
        GexfAdapter().parse(source=write_file("other.xml", "<graphml/>"))
