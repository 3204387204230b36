from opf_core.model import (
    BelongsToCollection,
    Contributor,
    Creator,
    Meta,
    Source,
    Title,
)


class TestDublinCore:
    """Test cases for the Dublin Core accessors."""

    def test_title_list(self, metadata):
        titles = metadata.title()
        assert [title.value() for title in titles] == ["Moby-Dick", "ou la Baleine"]
        assert all(isinstance(title, Title) for title in titles)

    def test_id_filter(self, metadata):
        assert [t.id() for t in metadata.title(id="subtitle")] == ["subtitle"]
        assert [t.id() for t in metadata.title(id=["subtitle", "title"])] == ["title", "subtitle"]
        assert metadata.title(id="nope") == []

    def test_single_valued_accessors(self, metadata):
        assert metadata.language()[0].value() == "en"
        assert metadata.date()[0].value() == "1851-10-18"
        assert metadata.publisher()[0].value() == "Harper & Brothers"
        assert metadata.rights()[0].value() == "Public domain"
        assert metadata.description()[0].value() == "A whale of a tale."
        assert metadata.type()[0].value() == "text"
        assert metadata.format()[0].value() == "application/epub+zip"
        assert metadata.coverage()[0].value() == "19th century"
        assert metadata.relation()[0].value() == "urn:isbn:9780000000003"

    def test_identifiers(self, metadata):
        assert [i.id() for i in metadata.identifier()] == ["pub-id", "alt-id"]

    def test_value_absent(self, make_package):
        package = make_package(
            '<package xmlns="http://www.idpf.org/2007/opf">'
            '<metadata xmlns:dc="http://purl.org/dc/elements/1.1/"><dc:title/></metadata>'
            '</package>'
        )
        assert package.metadata().title()[0].value() is None


class TestLocalization:
    def test_lang_on_element(self, metadata):
        assert metadata.title(id="subtitle")[0].lang() == "fr"

    def test_lang_falls_back_to_package(self, metadata):
        assert metadata.title(id="title")[0].lang() == "en"

    def test_lang_and_dir_fall_back_to_parent(self, minimal_package):
        title = minimal_package.metadata().title()[0]
        assert title.lang() == "de"
        assert title.dir() == "rtl"

    def test_dir(self, metadata):
        assert metadata.contributor()[0].dir() == "rtl"
        assert metadata.creator()[0].dir() == "ltr"


class TestRefinements:
    """Refinement lookups through the metadata refinement index."""

    def test_identifier_type(self, metadata):
        identifier = metadata.identifier(id="pub-id")[0]
        assert identifier.identifier_type().value() == "isbn"
        assert metadata.identifier(id="alt-id")[0].identifier_type() is None

    def test_title_refinements(self, metadata):
        title = metadata.title(id="title")[0]
        assert title.title_type().value() == "main"
        assert title.display_seq().value() == "1"
        assert title.group_position() is None

    def test_alternate_script_is_multi_valued(self, metadata):
        scripts = metadata.title(id="title")[0].alternate_script()
        assert all(isinstance(script, Meta) for script in scripts)
        assert [(s.value(), s.lang()) for s in scripts] == [("白鯨", "ja"), ("Моби Дик", "ru")]

    def test_alternate_script_absent(self, metadata):
        assert metadata.title(id="subtitle")[0].alternate_script() is None

    def test_creator_refinements(self, metadata):
        creator = metadata.creator()[0]
        assert isinstance(creator, Creator)
        assert isinstance(creator, Contributor)
        assert creator.role().value() == "aut"
        assert creator.role().scheme() == "marc:relators"
        assert creator.role().property() == "role"
        assert creator.file_as().value() == "Melville, Herman"
        assert creator.display_seq().value() == "1"
        assert creator.meta_auth().value() == "Library of Congress"

    def test_contributor_role(self, metadata):
        assert metadata.contributor()[0].role().value() == "edt"

    def test_subject(self, metadata):
        subject = metadata.subject()[0]
        assert subject.authority().value() == "BISAC"
        assert subject.term().value() == "FIC004000"

    def test_source(self, metadata):
        source = metadata.source()[0]
        assert isinstance(source, Source)
        assert source.source_of().value() == "pagination"
        assert source.identifier_type() is None

    def test_element_without_id(self, metadata):
        assert metadata.language()[0].file_as() is None

    def test_lookup_without_metadata(self, make_package):
        package = make_package(
            '<package xmlns="http://www.idpf.org/2007/opf"><spine/></package>'
        )
        assert package.metadata() is None


class TestMeta:
    def test_modified_ignores_refining_meta(self, metadata):
        assert metadata.modified().value() == "2020-01-01T00:00:00Z"
        assert metadata.modified().refines() is None

    def test_modified_absent(self, minimal_package):
        assert minimal_package.metadata().modified() is None

    def test_meta_by_property(self, metadata):
        assert len(metadata.meta(property="dcterms:modified")) == 2

    def test_meta_by_refines(self, metadata):
        assert len(metadata.meta(refines="title")) == 5
        scripts = metadata.meta(refines="title", property="alternate-script")
        assert [m.lang() for m in scripts] == ["ja", "ru"]

    def test_meta_by_id(self, metadata):
        assert [m.value() for m in metadata.meta(id="series")] == ["Great Novels"]

    def test_meta_property_list_is_conjunctive(self, metadata):
        assert metadata.meta(property=["role", "file-as"]) == []

    def test_meta_without_criteria(self, metadata):
        assert len(metadata.meta()) == 24


class TestCollections:
    def test_belongs_to_collection(self, metadata):
        collections = metadata.belongs_to_collection()
        assert [c.id() for c in collections] == ["series"]
        series = collections[0]
        assert isinstance(series, BelongsToCollection)
        assert series.value() == "Great Novels"
        assert series.collection_type().value() == "series"
        assert series.group_position().value() == "2"
        assert series.identifier().value() == "urn:series:1"

    def test_nested_collections(self, metadata):
        series = metadata.belongs_to_collection(id="series")[0]
        nested = series.belongs_to_collection()
        assert [(c.id(), c.value()) for c in nested] == [("box", "Box Set")]
        assert isinstance(nested[0], BelongsToCollection)
        assert nested[0].refines().id() == "series"
        assert nested[0].belongs_to_collection() is None
        assert nested[0].collection_type() is None


class TestLinks:
    def test_all_links(self, metadata):
        assert [link.id() for link in metadata.link()] == ["rec", "onix", "voicing"]

    def test_link_fields(self, metadata):
        onix = metadata.link(id="onix")[0]
        assert onix.href() == "meta/onix.xml"
        assert onix.media_type() == "application/xml"
        assert onix.rel() == ["record", "onix"]
        assert onix.properties() == ["onix"]
        assert metadata.link(id="rec")[0].properties() is None

    def test_href_filter(self, metadata):
        assert [l.id() for l in metadata.link(href="meta/record.xml")] == ["rec"]

    def test_rel_filters(self, metadata):
        assert [l.id() for l in metadata.link(any_rel=["onix", "voicing"])] == ["onix", "voicing"]
        assert [l.id() for l in metadata.link(all_rel="record")] == ["rec", "onix"]
        assert [l.id() for l in metadata.link(only_rel=["record"])] == ["rec"]
        assert [l.id() for l in metadata.link(only_rel=["onix", "record"])] == ["onix"]

    def test_property_filters(self, metadata):
        assert [l.id() for l in metadata.link(only_properties="onix")] == ["onix"]
        assert metadata.link(any_properties=["record"]) == []

    def test_only_properties_and_only_rel_combined(self, metadata):
        assert [l.id() for l in metadata.link(only_properties=["onix"], only_rel=["record"])] == []
        assert [l.id() for l in metadata.link(only_properties=["onix"], only_rel=["record", "onix"])] == ["onix"]

    def test_empty_only_filters(self, metadata):
        # every link carries @rel; only "onix" carries @properties
        assert metadata.link(only_rel=[]) == []
        assert [l.id() for l in metadata.link(only_properties=[])] == ["rec", "voicing"]

    def test_link_refines(self, metadata):
        voicing = metadata.link(id="voicing")[0]
        target = voicing.refines()
        assert isinstance(target, Title)
        assert target.id() == "title"
        assert metadata.link(id="rec")[0].refines() is None
