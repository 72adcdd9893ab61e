from datetime import date

from ochre.models import Bibliography, NestedBibliography
from ochre.transform.bibliography import parse_bibliographies, parse_bibliography
from tests.factories import identification


def raw_bibliography(**extra):
    return {
        "uuid": "b1",
        "type": "book",
        "n": 3,
        "publicationDateTime": "2024-03-01T10:00:00Z",
        "identification": identification("Smith 1990"),
        "project": {"identification": identification("Project")},
        "citationFormat": "Chicago",
        "citationFormatSpan": {"default:span": {"content": "Smith 1990"}},
        "referenceFormatDiv": {
            "div": {"div": {"content": "Smith, J. 1990. A Book."}}
        },
        "publicationInfo": {
            "publishers": {"publishers": {"person": {"uuid": "p1"}}},
            "startDate": {"year": 1990, "month": 5},
        },
        "entryInfo": {"startIssue": 2, "startVolume": "IV"},
        "sourceDocument": {"uuid": "sd1"},
        "authors": {
            "person": [
                {"uuid": "a1", "identification": identification("J. Smith")},
                {"uuid": "a2"},
            ]
        },
        "context": {"displayPath": "Project > Bibliography"},
        **extra,
    }


def test_full_bibliography():
    bibliography = parse_bibliography(raw_bibliography())

    assert isinstance(bibliography, Bibliography)
    assert bibliography.number == 3
    assert bibliography.project_identification.label == "Project"
    assert bibliography.citation.format == "Chicago"
    assert bibliography.citation.short == "Smith 1990"
    assert bibliography.citation.long == "Smith, J. 1990. A Book."
    assert bibliography.publication_info.start_date == date(1990, 5, 1)
    assert [p.uuid for p in bibliography.publication_info.publishers] == ["p1"]
    assert bibliography.entry_info.start_issue == "2"
    assert bibliography.entry_info.start_volume == "IV"
    assert bibliography.source.document_url == (
        "https://ochre.lib.uchicago.edu/ochre?uuid=sd1&load"
    )
    assert [author.uuid for author in bibliography.authors] == ["a1", "a2"]
    assert bibliography.publication_datetime is not None
    assert bibliography.context.display_path == "Project > Bibliography"


def test_nested_bibliography_has_no_provenance():
    bibliography = parse_bibliography(raw_bibliography(), is_nested=True)

    assert isinstance(bibliography, NestedBibliography)
    dumped = bibliography.model_dump()
    assert "publication_datetime" not in dumped
    assert "context" not in dumped


def test_minimal_bibliography():
    bibliography = parse_bibliography({"uuid": "b2"})

    assert bibliography.identification is None
    assert bibliography.citation.short is None
    assert bibliography.publication_info.start_date is None
    assert bibliography.entry_info is None
    assert bibliography.source.resource is None


def test_parse_bibliographies_wraps_single_entry():
    assert [b.uuid for b in parse_bibliographies({"uuid": "b1"})] == ["b1"]
