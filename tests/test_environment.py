"""Tests for config loading and the template environment."""

from pathlib import Path

import pytest
import yaml

from pdpug import ConfigError, EngineConfig, Environment, load_config, load_data

LAYOUT = """\
doctype html
html
  head
    title #{page_title}
  body
    | !{content}
"""


@pytest.fixture
def views(tmp_path):
    d = tmp_path / "views"
    d.mkdir()
    (d / "layout.pdpug").write_text(LAYOUT)
    (d / "list.pdpug").write_text("h1 #{title}\n")
    return d


# =============================================================================
# Config
# =============================================================================


class TestEngineConfig:
    def test_defaults(self):
        config = EngineConfig()
        assert config.max_include_depth == 20
        assert config.template_dir is None
        assert config.layout is None
        assert config.content_key == "content"
        assert config.extension == ".pdpug"

    def test_load_config(self, tmp_path):
        path = tmp_path / "pdpug.yaml"
        path.write_text(
            yaml.safe_dump({"template_dir": "views", "layout": "layout", "max_include_depth": 5})
        )
        config = load_config(path)
        assert config.template_dir == tmp_path / "views"
        assert config.layout == "layout"
        assert config.max_include_depth == 5

    def test_load_empty_config(self, tmp_path):
        path = tmp_path / "pdpug.yaml"
        path.write_text("")
        assert load_config(path) == EngineConfig()

    def test_load_config_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "pdpug.yaml")

    def test_load_config_invalid_value(self, tmp_path):
        path = tmp_path / "pdpug.yaml"
        path.write_text("max_include_depth: lots\n")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_load_config_not_a_mapping(self, tmp_path):
        path = tmp_path / "pdpug.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError):
            load_config(path)


class TestLoadData:
    def test_yaml(self, tmp_path):
        path = tmp_path / "data.yaml"
        path.write_text("title: Recipes\nitems:\n  - name: soup\n")
        assert load_data(path) == {"title": "Recipes", "items": [{"name": "soup"}]}

    def test_json(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text('{"total": 3, "ok": true}')
        assert load_data(path) == {"total": 3, "ok": True}

    def test_malformed(self, tmp_path):
        path = tmp_path / "data.yaml"
        path.write_text("a: [unclosed\n")
        with pytest.raises(ConfigError):
            load_data(path)


# =============================================================================
# Environment
# =============================================================================


class TestEnvironment:
    def test_resolve_adds_extension(self, views):
        env = Environment(EngineConfig(template_dir=views))
        assert env.resolve("list") == views / "list.pdpug"
        assert env.resolve("list.pdpug") == views / "list.pdpug"
        assert env.resolve(Path("/abs/page")) == Path("/abs/page.pdpug")

    def test_render_named_template(self, views):
        env = Environment(EngineConfig(template_dir=views))
        assert env.render("list", {"title": "Recipes"}) == "<h1>Recipes\n</h1>\n"

    def test_render_page_wraps_in_layout(self, views):
        env = Environment(EngineConfig(template_dir=views))
        html = env.render_page(
            "list",
            {"title": "Recipes"},
            layout="layout",
            layout_data={"page_title": "All <recipes>"},
        )
        assert html == (
            "<!doctype html>\n<html>\n<head>\n<title>All &lt;recipes&gt;\n</title>\n"
            "</head>\n<body>\n<h1>Recipes\n</h1>\n\n</body>\n</html>\n"
        )

    def test_render_page_uses_configured_layout(self, views):
        env = Environment(EngineConfig(template_dir=views, layout="layout"))
        html = env.render_page("list", {"title": "X"})
        assert html.startswith("<!doctype html>\n")
        assert "<h1>X\n</h1>\n" in html

    def test_render_page_without_layout(self, views):
        env = Environment(EngineConfig(template_dir=views))
        assert env.render_page("list", {"title": "X"}) == "<h1>X\n</h1>\n"

    def test_custom_content_key(self, views):
        (views / "shell.pdpug").write_text("main\n  | !{body}\n")
        env = Environment(EngineConfig(template_dir=views, content_key="body"))
        html = env.render_page("list", {"title": "X"}, layout="shell")
        assert html == "<main>\n<h1>X\n</h1>\n\n</main>\n"
