import logging

from citation_restyler import prose_parser
from citation_restyler.models import ParseMiss
from citation_restyler.prose_parser import (
    Dialect,
    MLA_JOURNAL_PLACEHOLDER,
    ProseCitationParser,
    StructuredDialectRule,
    parse_prose_citation,
)

LECUN_APA = (
    "LeCun, Y., Bengio, Y., & Hinton, G. (2015). Deep learning. nature, 521(7553), 436-444."
)
LECUN_MLA = (
    'LeCun, Yann, Yoshua Bengio, and Geoffrey Hinton. "Deep learning." '
    "nature 521.7553 (2015): 436-444."
)


def test_apa_citation_extracts_all_fields():
    record = parse_prose_citation({"APA": LECUN_APA})
    assert record.entry_type == "article"
    assert record.authors == ("LeCun, Y.", "Bengio, Y.", "Hinton, G.")
    assert record.year == "2015"
    assert record.title == "Deep learning"
    assert record.journal == "nature"
    assert record.volume == "521"
    assert record.number == "7553"
    assert record.pages == "436-444"


def test_apa_without_volume_details_keeps_whole_venue():
    record = parse_prose_citation(
        {"APA": "Doe, J. (2020). A study of things. Proceedings of Testing."}
    )
    assert record.authors == ("Doe, J.",)
    assert record.title == "A study of things"
    assert record.journal == "Proceedings of Testing."
    assert record.volume == ""
    assert record.pages == ""


def test_apa_without_title_split_uses_remainder_as_title():
    record = parse_prose_citation({"APA": "Doe, J. (2020). Untitled-work"})
    assert record.title == "Untitled-work"
    assert record.journal == ""


def test_apa_rule_reports_miss_without_year():
    result = StructuredDialectRule()("Doe, J. 2020. Title.", Dialect.APA)
    assert isinstance(result, ParseMiss)
    assert result.dialect == "APA"


def test_mla_citation_uses_full_name_rule():
    record = parse_prose_citation({"MLA": LECUN_MLA})
    assert record.year == "2015"
    assert record.title == "Deep learning"
    assert record.journal == MLA_JOURNAL_PLACEHOLDER
    assert record.authors == ("LeCun.", "Yann.", "Yoshua Bengio.", "Geoffrey Hinton.")
    assert record.volume == ""
    assert record.pages == ""


def test_mla_without_quotes_has_no_title_or_authors():
    record = parse_prose_citation({"MLA": "Anon. Untitled. Somewhere (2001): 1-2."})
    assert record.year == "2001"
    assert record.title == ""
    assert record.authors == ()


def test_apa_is_preferred_over_mla():
    parser = ProseCitationParser()
    record, source = parser.parse_with_source({"MLA": LECUN_MLA, "APA": LECUN_APA})
    assert source == "APA"
    assert record.journal == "nature"


def test_apa_miss_cascades_to_mla():
    parser = ProseCitationParser()
    record, source = parser.parse_with_source({"APA": "no year here", "MLA": LECUN_MLA})
    assert source == "MLA"
    assert record.year == "2015"


def test_chicago_goes_through_structured_rule_with_warning(caplog):
    chicago = "Smith, J. (2019). Something new. Journal of Things, 4(2), 10-20."
    with caplog.at_level(logging.WARNING, logger="citation_restyler.prose_parser"):
        record, source = ProseCitationParser().parse_with_source({"Chicago": chicago})
    assert source == "Chicago"
    assert record.volume == "4"
    assert "Chicago" in caplog.text


def test_unrecognized_dialects_return_fallback():
    record = parse_prose_citation({"Harvard": "LeCun Y (2015) Deep learning"})
    assert record.year == "n.d."
    assert record.authors == ()
    assert record.title == "LeCun Y (2015) Deep learning"


def test_missing_sources_return_empty_fallback():
    for sources in ({}, None):
        record = parse_prose_citation(sources)
        assert record.year == "n.d."
        assert record.authors == ()
        assert record.title == ""


def test_fallback_title_is_highest_priority_source():
    chicago = 'LeCun, Yann. "Deep Learning." Nature 521, no. 7553 (2015): 436-44.'
    record, source = ProseCitationParser().parse_with_source(
        {"Chicago": chicago, "APA": "unparseable apa"}
    )
    assert source == "fallback"
    assert record.title == "unparseable apa"


def test_dialect_keys_are_matched_loosely():
    record = parse_prose_citation({" apa ": LECUN_APA})
    assert record.year == "2015"


def test_rule_exception_becomes_miss(monkeypatch):
    def boom(text, dialect):
        raise IndexError("broken heuristic")

    monkeypatch.setitem(prose_parser.DIALECT_RULES, Dialect.APA, boom)
    record, source = ProseCitationParser().parse_with_source({"APA": LECUN_APA})
    assert source == "fallback"
    assert record.title == LECUN_APA
    assert record.year == "n.d."


def test_custom_priority_and_fallback_year():
    parser = ProseCitationParser(priority=(Dialect.MLA, Dialect.APA), fallback_year="s.d.")
    _, source = parser.parse_with_source({"APA": LECUN_APA, "MLA": LECUN_MLA})
    assert source == "MLA"
    assert parser.select_and_parse({}).year == "s.d."
