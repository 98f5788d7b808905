"""
Unit tests for built-in templates.
"""

from uibuilder.services.templates import (
    BUILTIN_TEMPLATES,
    blank_configuration,
    configuration_from_template,
    get_template,
)


class TestTemplates:
    """Tests for the template catalog"""

    def test_template_ids_unique(self):
        ids = [template.id for template in BUILTIN_TEMPLATES]
        assert len(ids) == len(set(ids))

    def test_get_template(self):
        assert get_template("image-review").category == "image"
        assert get_template("nope") is None

    def test_configuration_from_template(self):
        template = get_template("text-classification")
        configuration = configuration_from_template(template, "proj-9", created_by="ops@example.com")

        assert configuration.id.startswith("ui-config-")
        assert configuration.project_id == "proj-9"
        assert configuration.widget_ids == ["file", "label", "notes"]
        assert configuration.metadata.created_by == "ops@example.com"
        assert configuration.metadata.tags == ["template:text-classification"]

    def test_each_instantiation_gets_new_id(self):
        template = get_template("image-review")
        first = configuration_from_template(template, "p")
        second = configuration_from_template(template, "p")

        assert first.id != second.id
        assert first.widgets == second.widgets
        assert first.pipeline_mode == "REVIEW"

    def test_blank_configuration(self):
        configuration = blank_configuration("proj-1")

        assert configuration.name == "New UI Configuration"
        assert configuration.version == 1
        assert configuration.widgets == []
        assert configuration.layout.type == "two-column"
