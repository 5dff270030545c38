import pytest

from riskparse.mitigation.extractor import (
    MAX_MITIGATION_POINTS,
    HeadingStrategy,
    MitigationStrategy,
    TrailingSectionStrategy,
    collect_bullet_points,
    parse_mitigation_points,
)


def test_dedupes_and_strips_prefixes():
    text = (
        "Mitigation Summary:\n"
        "- Negotiate a liability cap\n"
        "- Negotiate a liability cap\n"
        "1. Add insurance rider"
    )
    assert parse_mitigation_points(text) == ["Negotiate a liability cap", "Add insurance rider"]


@pytest.mark.parametrize(
    "heading",
    ["Mitigation Summary", "Mitigation Recommendations", "Recommended Mitigations", "Mitigation Strategies"],
)
def test_each_heading_is_recognised(heading):
    text = f"Some risks above.\n\n{heading}:\n• Request a mutual waiver of consequential damages"
    assert parse_mitigation_points(text) == ["Request a mutual waiver of consequential damages"]


def test_first_heading_wins():
    text = (
        "Mitigation Strategies:\n- Strategy entry that comes first\n\n"
        "**Appendix**\n\n"
        "Mitigation Summary:\n- Summary entry that should win"
    )
    assert parse_mitigation_points(text) == ["Summary entry that should win"]


def test_section_stops_at_next_risk_block():
    text = (
        "Mitigation Summary:\n"
        "- Cap liquidated damages at 10% of contract value\n\n"
        "Risk Category: Payment\n"
        "- This bullet belongs to the next block"
    )
    assert parse_mitigation_points(text) == ["Cap liquidated damages at 10% of contract value"]


def test_section_stops_at_bold_marker():
    text = "Mitigation Summary:\n* Seek a force majeure carve-out\n\n**Closing Notes**\n- Not a mitigation point"
    assert parse_mitigation_points(text) == ["Seek a force majeure carve-out"]


def test_artifacts_and_short_lines_are_dropped():
    text = (
        "Mitigation Summary:\n"
        "- Too short\n"
        "- 1234567890\n"
        "- Replace [Party] with the legal entity name\n"
        "* **Indemnity**: narrow the scope\n"
        "Plain sentence without any bullet glyph\n"
        "10. Require written notice before any termination"
    )
    assert parse_mitigation_points(text) == ["Require written notice before any termination"]


def test_capped_at_ten_in_first_seen_order():
    bullets = "\n".join(f"- Mitigation action number {i}" for i in range(15))
    points = parse_mitigation_points("Mitigation Summary:\n" + bullets)
    assert len(points) == MAX_MITIGATION_POINTS
    assert points[0] == "Mitigation action number 0"
    assert points[-1] == "Mitigation action number 9"


def test_trailing_bullets_without_heading():
    text = (
        "Risk Category: Payment\nRisk Score: High\n\n"
        "Overall, consider these mitigation steps:\n"
        "- Obtain builder's risk insurance\n"
        "- Cap consequential damages"
    )
    assert parse_mitigation_points(text) == ["Obtain builder's risk insurance", "Cap consequential damages"]


def test_empty_heading_falls_through_to_trailing_scan():
    text = "Mitigation Summary:\nNone provided.\n\n**Notes**\n- Keep records of all change orders"
    assert parse_mitigation_points(text) == ["Keep records of all change orders"]


@pytest.mark.parametrize("text", [None, "", "No bullets at all.", "Mitigation"])
def test_nothing_found(text):
    assert parse_mitigation_points(text) == []


def test_heading_strategy_section():
    strategy = HeadingStrategy("Mitigation Summary")
    assert strategy.section("no heading here") is None
    assert strategy.section("MITIGATION SUMMARY:\n- a\n\nPart 2 more") == "\n- a"


def test_trailing_strategy_uses_last_mention():
    assert TrailingSectionStrategy().section("mitigation one\nMitigation two") == " two"


def test_custom_strategy_order():
    text = "Recommended Mitigations:\n- Recommended entry here\n\n**X**\n\nMitigation Summary:\n- Summary entry here"
    points = parse_mitigation_points(text, strategies=[HeadingStrategy("Recommended Mitigations")])
    assert points == ["Recommended entry here"]


def test_collect_bullet_points_invariants():
    block = "\n".join(["- Repeated recommendation"] * 5 + [f"- Unique recommendation {i}" for i in range(20)])
    points = collect_bullet_points(block)
    assert len(points) <= MAX_MITIGATION_POINTS
    assert len(points) == len(set(points))


class FixedBlockStrategy:
    name = "fixed"

    def section(self, text):
        return "- Always return this recommendation"


def test_any_object_with_name_and_section_is_a_strategy():
    strategies: list[MitigationStrategy] = [HeadingStrategy("Mitigation Summary"), FixedBlockStrategy()]
    assert parse_mitigation_points("no headings", strategies=strategies) == ["Always return this recommendation"]
