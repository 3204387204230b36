import pytest

from opf_core.mapping.refinement_index import RefinementIndex


@pytest.fixture
def index(sample_tree):
    metadata_element = sample_tree.getroot()[0]
    return RefinementIndex.build(metadata_element)


class TestRefinementIndex:
    """Test cases for the (id, property) refinement lookup."""

    def test_resolve_one(self, index):
        assert index.resolve_one("creator", "role").text == "aut"

    def test_resolve_all_keeps_document_order(self, index):
        scripts = index.resolve_all("title", "alternate-script")
        assert [meta.text for meta in scripts] == ["白鯨", "Моби Дик"]

    def test_unknown_property(self, index):
        assert index.resolve_all("title", "role") is None
        assert index.resolve_one("title", "role") is None

    def test_unknown_id(self, index):
        assert index.resolve_all("unknown", "role") is None

    def test_no_id(self, index):
        assert index.resolve_all(None, "role") is None
        assert index.resolve_one(None, "role") is None

    def test_refines_without_hash(self, index):
        assert index.resolve_one("creator", "display-seq").text == "1"

    def test_dangling_refinements_are_indexed(self, index):
        assert "nowhere" in index

    def test_links_without_property_are_skipped(self, index):
        # <link refines="#title"> has no @property
        assert index.resolve_all("title", "voicing") is None

    def test_statistics(self, index):
        stats = index.get_statistics()
        assert len(index) == 22
        assert stats["refining_elements"] == 22
        assert stats["refined_ids"] == 11
        assert stats["properties"]["display-seq"] == 3
        assert stats["properties"]["alternate-script"] == 2

    def test_refined_ids_in_document_order(self, index):
        assert index.refined_ids()[:3] == ["pub-id", "title", "creator"]

    def test_export_mapping(self, index):
        mapping = index.export_mapping()
        assert mapping["pub-id"] == {"identifier-type": ["isbn"]}
        assert mapping["series"]["group-position"] == ["2"]

    def test_returned_lists_are_copies(self, index):
        index.resolve_all("title", "alternate-script").clear()
        assert len(index.resolve_all("title", "alternate-script")) == 2

    def test_empty_metadata(self, make_package):
        package = make_package(
            '<package xmlns="http://www.idpf.org/2007/opf"><metadata/></package>'
        )
        assert len(package.metadata().refinements) == 0
        assert package.metadata().refinements.export_mapping() == {}
