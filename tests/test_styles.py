"""Tests for the styles.xml parser."""

import pytest
from docxreader.docx_parser.ooxml import half_points, to_float, to_int
from docxreader.docx_parser.styles import parse_styles
from docxreader.ir import Color, Justification, StyleKind

from generators import styles_xml


class TestStyleTable:
    """Tests for building the unresolved style table."""

    def test_basic_records(self):
        """Each w:style becomes a record keyed by styleId."""
        styles = parse_styles(styles_xml("""
            <w:style w:type="paragraph" w:styleId="Normal"><w:name w:val="Normal"/></w:style>
            <w:style w:type="character" w:styleId="Strong">
                <w:basedOn w:val="DefaultParagraphFont"/>
            </w:style>
        """))
        assert set(styles) == {"Normal", "Strong"}
        assert styles["Normal"].kind is StyleKind.PARAGRAPH
        assert styles["Normal"].name == "Normal"
        assert styles["Strong"].kind is StyleKind.RUN
        assert styles["Strong"].based_on == "DefaultParagraphFont"

    def test_missing_style_id_is_skipped(self):
        """Styles without a styleId are dropped."""
        styles = parse_styles(styles_xml("""
            <w:style w:type="paragraph"><w:name w:val="Anonymous"/></w:style>
            <w:style w:type="paragraph" w:styleId="Kept"/>
        """))
        assert list(styles) == ["Kept"]

    @pytest.mark.parametrize("type_attr", ['w:type="table"', 'w:type="numbering"', ""])
    def test_kind_defaults_to_run(self, type_attr):
        """Anything but a paragraph style is RUN."""
        styles = parse_styles(styles_xml(f'<w:style {type_attr} w:styleId="S"/>'))
        assert styles["S"].kind is StyleKind.RUN

    def test_duplicate_ids_keep_first(self):
        """The first definition of a repeated id wins."""
        styles = parse_styles(styles_xml("""
            <w:style w:styleId="Dup"><w:rPr><w:b/></w:rPr></w:style>
            <w:style w:styleId="Dup"><w:rPr><w:i/></w:rPr></w:style>
        """))
        assert styles["Dup"].bold is True
        assert styles["Dup"].italic is False

    @pytest.mark.parametrize("data", [None, b"", b"<not-xml", b'<root xmlns:w="x"/>'])
    def test_unusable_part_gives_empty_table(self, data):
        """Missing, malformed or foreign parts give an empty table."""
        assert parse_styles(data) == {}


class TestRunProperties:
    """Tests for w:rPr extraction."""

    def test_flags_by_presence(self):
        """A bare toggle element turns its flag on."""
        styles = parse_styles(styles_xml("""
            <w:style w:styleId="S"><w:rPr>
                <w:b/><w:i/><w:u w:val="single"/><w:strike/><w:subscript/><w:superscript/>
            </w:rPr></w:style>
        """))
        s = styles["S"]
        assert (s.bold, s.italic, s.underline, s.strike, s.subscript, s.superscript) == (True,) * 6

    def test_absent_flags_are_unset(self):
        """Toggles not present stay off."""
        styles = parse_styles(styles_xml('<w:style w:styleId="S"><w:rPr><w:b/></w:rPr></w:style>'))
        assert styles["S"].italic is False

    def test_explicit_off_values(self):
        """w:val of 0, false or none leaves the flag unset."""
        styles = parse_styles(styles_xml("""
            <w:style w:styleId="S"><w:rPr><w:b w:val="0"/><w:i w:val="false"/><w:u w:val="none"/></w:rPr></w:style>
        """))
        s = styles["S"]
        assert (s.bold, s.italic, s.underline) == (False, False, False)

    def test_vert_align(self):
        """w:vertAlign maps to subscript and superscript."""
        styles = parse_styles(styles_xml("""
            <w:style w:styleId="Sub"><w:rPr><w:vertAlign w:val="subscript"/></w:rPr></w:style>
            <w:style w:styleId="Sup"><w:rPr><w:vertAlign w:val="superscript"/></w:rPr></w:style>
        """))
        assert styles["Sub"].subscript is True
        assert styles["Sup"].superscript is True

    def test_colors_font_and_size(self):
        """Color, shading fill, ascii font and half-point size are read."""
        styles = parse_styles(styles_xml("""
            <w:style w:styleId="S"><w:rPr>
                <w:color w:val="1F4E79"/>
                <w:shd w:val="clear" w:fill="FFFF0080"/>
                <w:rFonts w:ascii="Georgia" w:hAnsi="Arial"/>
                <w:sz w:val="25"/>
            </w:rPr></w:style>
        """))
        s = styles["S"]
        assert s.color == Color(0x1F, 0x4E, 0x79, 255)
        assert s.back_color == Color(255, 255, 0, 0x80)
        assert s.font_family == "Georgia"
        assert s.font_size == 12.5

    def test_font_falls_back_to_hansi(self):
        """hAnsi is used when ascii is missing."""
        styles = parse_styles(styles_xml('<w:style w:styleId="S"><w:rPr><w:rFonts w:hAnsi="Arial"/></w:rPr></w:style>'))
        assert styles["S"].font_family == "Arial"

    def test_auto_color_stays_default(self):
        """color="auto" is not a color."""
        styles = parse_styles(styles_xml('<w:style w:styleId="S"><w:rPr><w:color w:val="auto"/></w:rPr></w:style>'))
        assert styles["S"].color.is_default

    @pytest.mark.parametrize("value", ["big", "inf", "-inf", "nan", "1_0"])
    def test_unusable_size_is_unset(self, value):
        """Non-numeric, non-finite or underscored sizes leave font_size unset."""
        styles = parse_styles(styles_xml(f'<w:style w:styleId="S"><w:rPr><w:sz w:val="{value}"/></w:rPr></w:style>'))
        assert styles["S"].font_size == 0.0


class TestNumberParsing:
    """Tests for the attribute number helpers."""

    @pytest.mark.parametrize("value", [None, "", "x", "inf", "Infinity", "nan", "1_0"])
    def test_to_float_rejects(self, value):
        """Only finite plain decimals parse."""
        assert to_float(value) is None

    def test_to_float_accepts_decimals(self):
        """Signed and fractional values parse."""
        assert to_float("-12.5") == -12.5
        assert half_points("21") == 10.5

    def test_to_int(self):
        """Integers parse; underscores and junk do not."""
        assert to_int("-1") == -1
        assert to_int("1_000") is None
        assert to_int("1.5") is None


class TestParagraphProperties:
    """Tests for w:pPr extraction and unit conversions."""

    def test_spacing_and_indent_units(self):
        """Twentieths become points and 240ths become a line multiplier."""
        styles = parse_styles(styles_xml("""
            <w:style w:type="paragraph" w:styleId="P"><w:pPr>
                <w:spacing w:before="240" w:after="120" w:line="360"/>
                <w:ind w:left="720" w:right="360" w:firstLine="288"/>
            </w:pPr></w:style>
        """))
        p = styles["P"]
        assert p.space_before == 12.0
        assert p.space_after == 6.0
        assert p.line_spacing == 1.5
        assert p.indent_left == 36.0
        assert p.indent_right == 18.0
        assert p.indent_first_line == 14.4
        assert p.space_between_same_style is False

    def test_exact_line_rule_and_contextual_spacing(self):
        """lineRule="exact" and w:contextualSpacing both set space_between_same_style."""
        styles = parse_styles(styles_xml("""
            <w:style w:styleId="A"><w:pPr><w:spacing w:line="240" w:lineRule="exact"/></w:pPr></w:style>
            <w:style w:styleId="B"><w:pPr><w:contextualSpacing/></w:pPr></w:style>
        """))
        assert styles["A"].space_between_same_style is True
        assert styles["B"].space_between_same_style is True

    def test_numbering_defaults_to_decimal(self):
        """Any numId gives a decimal numbered paragraph."""
        styles = parse_styles(styles_xml("""
            <w:style w:type="paragraph" w:styleId="List"><w:pPr>
                <w:numPr><w:ilvl w:val="2"/><w:numId w:val="7"/><w:numStyle w:val="Outline"/></w:numPr>
            </w:pPr></w:style>
        """))
        s = styles["List"]
        assert s.numbered is True
        assert s.number_format == "decimal"
        assert s.level == 2
        assert s.number_style == "Outline"

    def test_numpr_without_numid(self):
        """numPr alone marks numbering without a format."""
        styles = parse_styles(styles_xml('<w:style w:styleId="L"><w:pPr><w:numPr/></w:pPr></w:style>'))
        assert styles["L"].numbered is True
        assert styles["L"].number_format == ""

    def test_outline_level(self):
        """outlineLvl sets the level."""
        styles = parse_styles(styles_xml('<w:style w:styleId="H"><w:pPr><w:outlineLvl w:val="3"/></w:pPr></w:style>'))
        assert styles["H"].level == 3

    @pytest.mark.parametrize("value,expected", [
        ("center", Justification.CENTER),
        ("right", Justification.RIGHT),
        ("both", Justification.JUSTIFY),
        ("left", Justification.LEFT),
        ("mediumKashida", Justification.LEFT),
    ])
    def test_justification(self, value, expected):
        """w:jc values map onto Justification."""
        styles = parse_styles(styles_xml(f'<w:style w:styleId="J"><w:pPr><w:jc w:val="{value}"/></w:pPr></w:style>'))
        assert styles["J"].justification is expected

    def test_tabs_in_order(self):
        """Tab stops keep document order with position, alignment and leader."""
        styles = parse_styles(styles_xml("""
            <w:style w:styleId="T"><w:pPr><w:tabs>
                <w:tab w:val="right" w:leader="dot" w:pos="9360"/>
                <w:tab w:val="center" w:pos="4680"/>
            </w:tabs></w:pPr></w:style>
        """))
        tabs = styles["T"].tabs
        assert [(t.position, t.alignment, t.leader) for t in tabs] == [
            (468.0, "right", "dot"),
            (234.0, "center", ""),
        ]

    def test_bidi(self):
        """w:bidi sets right_direction."""
        styles = parse_styles(styles_xml('<w:style w:styleId="R"><w:pPr><w:bidi/></w:pPr></w:style>'))
        assert styles["R"].right_direction is True
