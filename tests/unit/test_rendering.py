"""Tests for HTML escaping and profile template rendering."""

import pytest

from profile_app.application.rendering import TemplateCache, escape_html, render_profile
from profile_app.core.config import Settings
from profile_app.domain.models import UserRecord


@pytest.fixture
def record():
    return UserRecord(
        id="0123456789abcdef01234567",
        name="<script>alert(1)</script> Jane",
        email="jane@example.com",
        hobbies="Reading & \"Hiking\"",
        location="O'Hare",
    )


class TestEscapeHtml:
    """Tests for escape_html."""

    def test_escapes_all_five_characters(self):
        assert escape_html("&<>\"'") == "&amp;&lt;&gt;&quot;&#39;"

    def test_ampersand_escaped_once(self):
        assert escape_html("<") == "&lt;"
        assert escape_html("a & b") == "a &amp; b"

    def test_none_is_empty(self):
        assert escape_html(None) == ""

    def test_non_string_values(self):
        assert escape_html(42) == "42"

    @pytest.mark.parametrize("value", ["<b>", "<<>>", "&lt;", "plain", "'\"<&>"])
    def test_repeated_escaping_never_yields_angle_brackets(self, value):
        once = escape_html(value)
        twice = escape_html(once)

        for output in (once, twice):
            assert "<" not in output
            assert ">" not in output


class TestRenderProfile:
    """Tests for render_profile."""

    def test_replaces_every_occurrence(self, record):
        template = "{{id}}|{{id}}|{{email}}|{{email}}"

        assert render_profile(template, record) == (
            "0123456789abcdef01234567|0123456789abcdef01234567|"
            "jane@example.com|jane@example.com"
        )

    def test_escapes_script_in_name(self, record):
        html = render_profile("<h1>{{name}}</h1>", record)

        assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html
        assert "<script>" not in html

    def test_escapes_attribute_values(self, record):
        html = render_profile('<input value="{{hobbies}}"><p>{{location}}</p>', record)

        assert 'value="Reading &amp; &quot;Hiking&quot;"' in html
        assert "O&#39;Hare" in html

    def test_missing_hobbies_render_empty(self, record):
        record.hobbies = None

        assert render_profile("[{{hobbies}}]", record) == "[]"


class TestTemplateCache:
    """Tests for TemplateCache."""

    def test_loads_packaged_templates(self, env):
        cache = TemplateCache(Settings().views_dir)

        assert 'action="/register"' in cache.register_page
        assert "{{name}}" in cache.profile_template

    def test_templates_read_once(self, tmp_path, record):
        (tmp_path / "register.html").write_text("register", encoding="utf-8")
        (tmp_path / "profile.html").write_text("<p>{{name}}</p>", encoding="utf-8")
        cache = TemplateCache(tmp_path)

        (tmp_path / "profile.html").write_text("changed", encoding="utf-8")

        assert cache.render_profile(record).startswith("<p>&lt;script&gt;")

    def test_missing_template_fails_fast(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            TemplateCache(tmp_path)
