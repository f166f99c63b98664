"""Tests for assembly and type reference aggregation."""

import xml.etree.ElementTree as ET

from ndeps_graph.analysis.models import ParseReport
from ndeps_graph.analysis.references import ReferenceAggregator
from ndeps_graph.infrastructure.entities import EntityType
from ndeps_graph.infrastructure.relations import USES


def _aggregator(resolver, store):
    report = ParseReport(scope="compile", source="test")
    return ReferenceAggregator(resolver, store, report), report


def _type_refs(*pairs):
    root = ET.Element("TypeReferences")
    for from_type, to_types in pairs:
        from_el = ET.SubElement(root, "From", fullname=from_type)
        for to_type in to_types:
            ET.SubElement(from_el, "To", fullname=to_type)
    return root


class TestAssemblyReferences:
    def test_each_reference_is_a_new_edge(self, resolver, store, core_context):
        """The same reference twice gives two records of weight 1."""
        section = ET.fromstring(
            "<References>"
            '<Reference name="log4net" version="1.2"/>'
            '<Reference name="log4net" version="1.2"/>'
            "</References>"
        )
        aggregator, report = _aggregator(resolver, store)

        aggregator.parse_references("compile", section, core_context.project)

        deps = store.dependencies
        assert len(deps) == 2
        assert deps[0] is not deps[1]
        assert [d.weight for d in deps] == [1, 1]
        assert report.assembly_dependencies == 2

    def test_library_entity_is_shared(self, resolver, store, core_context):
        section = ET.fromstring(
            '<References><Reference name="log4net" version="1.2"/>'
            '<Reference name="log4net" version="1.2"/></References>'
        )
        aggregator, _ = _aggregator(resolver, store)

        aggregator.parse_references("compile", section, core_context.project)

        first, second = store.dependencies
        assert first.target is second.target

    def test_solution_project_reference(self, resolver, store):
        web = resolver.context_for("Acme.Web").project
        section = ET.fromstring('<References><Reference name="Acme.Core" version="1.0"/></References>')
        aggregator, _ = _aggregator(resolver, store)

        aggregator.parse_references("compile", section, web)

        (dep,) = store.dependencies
        assert dep.target.type == EntityType.PROJECT
        assert dep.target.key == "acme:Acme.Core"

    def test_nameless_reference_is_skipped(self, resolver, store, core_context):
        section = ET.fromstring('<References><Reference version="1.2"/></References>')
        aggregator, report = _aggregator(resolver, store)

        aggregator.parse_references("compile", section, core_context.project)

        assert store.dependencies == []
        assert report.unresolved_references == 1


class TestTypeReferences:
    def test_folder_edge_counts_file_edges(self, resolver, store):
        """a/A -> b/B and a/A -> b/C share one a -> b edge of weight 2."""
        aggregator, report = _aggregator(resolver, store)

        aggregator.parse_type_references(_type_refs(("A", ["B", "C"])))

        folder_edges = [d for d in store.dependencies if d.source.type == EntityType.DIRECTORY]
        file_edges = [d for d in store.dependencies if d.source.type == EntityType.FILE]
        assert len(folder_edges) == 1
        assert folder_edges[0].weight == 2
        assert len(file_edges) == 2
        assert all(f.parent is folder_edges[0] for f in file_edges)
        assert report.folder_dependencies == 1
        assert report.file_dependencies == 2

    def test_repeated_file_pair_is_not_merged(self, resolver, store):
        aggregator, _ = _aggregator(resolver, store)

        aggregator.parse_type_references(_type_refs(("A", ["B"]), ("A", ["B"])))

        file_edges = [d for d in store.dependencies if d.source.type == EntityType.FILE]
        assert len(file_edges) == 2
        assert [d.weight for d in file_edges] == [1, 1]
        (folder,) = [d for d in store.dependencies if d.source.type == EntityType.DIRECTORY]
        assert folder.weight == 2

    def test_folder_edge_accumulates_across_sections(self, resolver, store):
        aggregator, _ = _aggregator(resolver, store)

        aggregator.parse_type_references(_type_refs(("A", ["B"])))
        aggregator.parse_type_references(_type_refs(("A", ["C"])))

        folder_edges = [d for d in store.dependencies if d.source.type == EntityType.DIRECTORY]
        assert len(folder_edges) == 1
        assert folder_edges[0].weight == 2

    def test_unresolved_endpoint_changes_nothing(self, resolver, store):
        aggregator, report = _aggregator(resolver, store)

        aggregator.parse_type_references(_type_refs(("A", ["System.String"]), ("Unknown", ["B"])))

        assert store.dependencies == []
        assert report.unresolved_type_pairs == 2

    def test_skip_leaves_existing_weight_untouched(self, resolver, store):
        aggregator, _ = _aggregator(resolver, store)

        aggregator.parse_type_references(_type_refs(("A", ["B", "Missing", "C"])))

        (folder,) = [d for d in store.dependencies if d.source.type == EntityType.DIRECTORY]
        assert folder.weight == 2

    def test_root_file_rolls_up_to_project(self, resolver, store, core_context):
        aggregator, _ = _aggregator(resolver, store)

        aggregator.parse_type_references(_type_refs(("Root", ["B"])))

        folder = store.dependencies[0]
        assert folder.source == core_context.project
        assert folder.target.name == "b"
        assert folder.usage == USES

    def test_cross_project_type_reference(self, resolver, store):
        aggregator, _ = _aggregator(resolver, store)

        aggregator.parse_type_references(_type_refs(("W", ["A"])))

        folder, file = store.dependencies
        assert folder.source.key == "acme:Acme.Web:web"
        assert folder.target.key == "acme:Acme.Core:a"
        assert file.parent is folder


class TestFindFolderDependency:
    def test_creates_then_increments(self, resolver, store):
        aggregator, _ = _aggregator(resolver, store)
        a = resolver.parent_of(resolver.resolve_type("A"))
        b = resolver.parent_of(resolver.resolve_type("B"))

        first = aggregator.find_folder_dependency(a, b)
        second = aggregator.find_folder_dependency(a, b)

        assert first is second
        assert second.weight == 2
        assert store.dependencies == [first]

    def test_ignores_scoped_edge_between_same_entities(self, resolver, store, core_context):
        """A compile edge between two projects is not reused as a folder edge."""
        from ndeps_graph.infrastructure.relations import Dependency

        web = resolver.context_for("Acme.Web").project
        store.save_dependency(Dependency(web, core_context.project, usage="compile"))
        aggregator, _ = _aggregator(resolver, store)

        folder = aggregator.find_folder_dependency(web, core_context.project)

        assert folder.usage == USES
        assert folder.weight == 1
        assert len(store.dependencies) == 2
