"""Shared fixtures: sample package documents parsed with lxml."""

import logging

import pytest

from opf_core.model import Package
from opf_core.xml.utils import parse_package_document

# Configure test logging
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


SAMPLE_OPF = """<?xml version="1.0" encoding="UTF-8"?>
<package xmlns="http://www.idpf.org/2007/opf" version="3.0"
         unique-identifier="pub-id" xml:lang="en" dir="ltr">
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/">
    <dc:identifier id="pub-id">urn:x</dc:identifier>
    <meta refines="#pub-id" property="identifier-type">isbn</meta>
    <dc:identifier id="alt-id">urn:uuid:8f0c1e4a</dc:identifier>

    <dc:title id="title">Moby-Dick</dc:title>
    <meta refines="#title" property="title-type">main</meta>
    <meta refines="#title" property="alternate-script" xml:lang="ja">白鯨</meta>
    <meta refines="#title" property="alternate-script" xml:lang="ru">Моби Дик</meta>
    <meta refines="#title" property="display-seq">1</meta>
    <dc:title id="subtitle" xml:lang="fr">ou la Baleine</dc:title>

    <dc:language>en</dc:language>
    <dc:creator id="creator">Herman Melville</dc:creator>
    <meta refines="#creator" property="role" scheme="marc:relators">aut</meta>
    <meta refines="#creator" property="file-as">Melville, Herman</meta>
    <meta refines="creator" property="display-seq">1</meta>
    <meta refines="#creator" property="meta-auth">Library of Congress</meta>
    <dc:contributor id="contrib" dir="rtl">Ishmael</dc:contributor>
    <meta refines="#contrib" property="role">edt</meta>

    <dc:date>1851-10-18</dc:date>
    <dc:publisher>Harper &amp; Brothers</dc:publisher>
    <dc:subject id="subj">Whaling</dc:subject>
    <meta refines="#subj" property="authority">BISAC</meta>
    <meta refines="#subj" property="term">FIC004000</meta>
    <dc:source id="src">urn:isbn:9780000000002</dc:source>
    <meta refines="#src" property="source-of">pagination</meta>
    <dc:rights>Public domain</dc:rights>
    <dc:description>A whale of a tale.</dc:description>
    <dc:type>text</dc:type>
    <dc:format>application/epub+zip</dc:format>
    <dc:coverage>19th century</dc:coverage>
    <dc:relation>urn:isbn:9780000000003</dc:relation>

    <meta property="dcterms:modified">2020-01-01T00:00:00Z</meta>
    <meta refines="#title" property="dcterms:modified">2019-01-01T00:00:00Z</meta>

    <meta property="belongs-to-collection" id="series">Great Novels</meta>
    <meta refines="#series" property="collection-type">series</meta>
    <meta refines="#series" property="group-position">2</meta>
    <meta refines="#series" property="dcterms:identifier">urn:series:1</meta>
    <meta refines="#series" property="belongs-to-collection" id="box">Box Set</meta>

    <meta refines="#chapter1" property="media:duration">0:32:29</meta>
    <meta refines="#itemref-ch1" property="rendition:spread">none</meta>
    <meta refines="#col" property="display-seq">3</meta>
    <meta refines="#nowhere" property="file-as">Nobody</meta>

    <link id="rec" href="meta/record.xml" rel="record" media-type="application/marcxml+xml"/>
    <link id="onix" href="meta/onix.xml" rel="record   onix" properties="onix"
          media-type="application/xml"/>
    <link id="voicing" href="audio/title.mp3" rel="voicing" refines="#title"
          media-type="audio/mpeg"/>
  </metadata>
  <manifest>
    <item id="nav" href="nav.xhtml" media-type="application/xhtml+xml" properties="nav"/>
    <item id="cover" href="cover.xhtml" media-type="application/xhtml+xml"
          properties="cover-image nav"/>
    <item id="chapter1" href="ch1.xhtml" media-type="application/xhtml+xml"
          media-overlay="ch1-smil" properties="scripted  svg"/>
    <item id="ch1-smil" href="ch1.smil" media-type="application/smil+xml"/>
    <item id="chapter2" href="ch2.xhtml" media-type="application/xhtml+xml"/>
    <item id="fig" href="fig.svgz" media-type="image/svg+xml" fallback="fig-png"/>
    <item id="fig-png" href="fig.png" media-type="image/png" fallback="missing"/>
    <item id="loop-a" href="a.xhtml" media-type="application/xhtml+xml" fallback="loop-b"/>
    <item id="loop-b" href="b.xhtml" media-type="application/xhtml+xml" fallback="loop-a"/>
    <item id="ncx" href="toc.ncx" media-type="application/x-dtbncx+xml"/>
  </manifest>
  <spine toc="ncx" page-progression-direction="ltr">
    <itemref id="itemref-nav" idref="nav" linear="no"/>
    <itemref id="itemref-ch1" idref="chapter1" properties="page-spread-right"/>
    <itemref id="itemref-ch2" idref="chapter2" linear="yes"
             properties="page-spread-left rendition:layout-pre-paginated"/>
    <itemref id="itemref-ghost" idref="ghost"/>
  </spine>
  <collection role="index" id="col">
    <link href="index.xhtml"/>
  </collection>
</package>
"""


MINIMAL_OPF = """<package xmlns="http://www.idpf.org/2007/opf" version="3.0">
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/" xml:lang="de" dir="rtl">
    <dc:identifier id="id">urn:minimal</dc:identifier>
    <dc:title>Kurz</dc:title>
  </metadata>
</package>
"""


@pytest.fixture
def sample_opf():
    """Raw sample package document."""
    return SAMPLE_OPF


@pytest.fixture
def sample_tree():
    """Parsed sample package document."""
    return parse_package_document(SAMPLE_OPF)


@pytest.fixture
def package(sample_tree):
    """Fresh Package over the sample document."""
    return Package(sample_tree)


@pytest.fixture
def metadata(package):
    return package.metadata()


@pytest.fixture
def manifest(package):
    return package.manifest()


@pytest.fixture
def spine(package):
    return package.spine()


@pytest.fixture
def minimal_package():
    """Package with metadata only: no manifest, spine or modified date."""
    return Package(parse_package_document(MINIMAL_OPF))


@pytest.fixture
def make_package():
    """Factory building a Package from an OPF string."""
    def _make(opf: str) -> Package:
        return Package(parse_package_document(opf))
    return _make


@pytest.fixture
def opf_file(tmp_path):
    """Sample package document written to disk."""
    path = tmp_path / "content.opf"
    path.write_text(SAMPLE_OPF, encoding="utf-8")
    return path
