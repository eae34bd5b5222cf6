"""Tests for line cleanup and obfuscated e-mail decoding."""

from resume_analyzer.core.text_normalization import (
    clean_lines,
    decode_obfuscated_emails,
    despace_if_needed,
    is_bullet,
    strip_bullet,
    title_case_each_word,
    user_looks_like_phone,
)


def test_despace_letter_spaced_heading():
    assert despace_if_needed("E X P E R I E N C E") == "EXPERIENCE"


def test_despace_keeps_word_boundaries():
    assert despace_if_needed("J O H N   D O E") == "JOHN DOE"


def test_despace_phone_number():
    assert despace_if_needed("5 5 5 . 1 2 3 . 4 5 6 7") == "555.123.4567"


def test_despace_leaves_normal_text_alone():
    assert despace_if_needed("Software Engineer at TechCorp") == "Software Engineer at TechCorp"


def test_clean_lines_drops_blank_lines_and_collapses_spaces():
    text = "Jane   Doe\r\n\r\n   \nEXPERIENCE\n"
    assert clean_lines(text) == ["Jane Doe", "EXPERIENCE"]


def test_clean_lines_empty_input():
    assert clean_lines("") == []


def test_bullet_detection():
    assert is_bullet("• Built APIs")
    assert is_bullet("- Built APIs")
    assert is_bullet("* Built APIs")
    assert not is_bullet("Built APIs")


def test_leading_plus_phone_is_not_a_bullet():
    """A '+92 ...' line is a phone number, not a '+' bullet."""
    assert not is_bullet("+92 318 0623294")
    assert strip_bullet("+92 318 0623294") == "+92 318 0623294"


def test_strip_bullet():
    assert strip_bullet("  ● Led a team of 5") == "Led a team of 5"


def test_title_case_each_word():
    assert title_case_each_word("JOHN O'NEIL") == "John O'neil"
    assert title_case_each_word("jane doe") == "Jane Doe"


def test_decode_bracketed_email():
    assert decode_obfuscated_emails("user [at] domain [dot] com") == "user@domain.com"


def test_decode_mixed_brackets():
    assert decode_obfuscated_emails("user(at)domain{dot}co{dot}uk") == "user@domain.co.uk"


def test_decode_spelled_out_email():
    assert decode_obfuscated_emails("Mail: user at domain dot com") == "Mail: user@domain.com"


def test_job_line_with_at_is_not_decoded():
    line = "Software Engineer at TechCorp (2020-Present)"
    assert decode_obfuscated_emails(line) == line


def test_user_looks_like_phone():
    assert user_looks_like_phone("(856)366-5713k.o.harbaugh")
    assert not user_looks_like_phone("jane.doe")
