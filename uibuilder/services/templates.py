"""
Built-in Templates

Starter configurations offered in the toolbox, and conversion of a
template into a fresh configuration for a project.
"""

from datetime import datetime, timezone
from uuid import uuid4

from uibuilder.models.contracts.configuration import Configuration, UITemplate
from uibuilder.models.enums import PipelineMode

BUILTIN_TEMPLATES: list[UITemplate] = [
    UITemplate.model_validate({
        "id": "text-classification",
        "name": "Text Classification",
        "description": "Show a text file and pick one label, with optional notes",
        "category": "text",
        "configuration": {
            "name": "Text Classification",
            "fileType": "TEXT",
            "layout": {"type": "two-column", "columns": 2, "gap": 16},
            "widgets": [
                {
                    "id": "file",
                    "type": "FILE_VIEWER",
                    "label": "Document",
                    "fileType": "TEXT",
                    "position": {"x": 0, "y": 0},
                    "size": {"width": 600, "height": 400},
                    "order": 0,
                },
                {
                    "id": "label",
                    "type": "RADIO_GROUP",
                    "label": "Label",
                    "required": True,
                    "options": [
                        {"id": "opt-positive", "label": "Positive", "value": "positive"},
                        {"id": "opt-neutral", "label": "Neutral", "value": "neutral"},
                        {"id": "opt-negative", "label": "Negative", "value": "negative"},
                    ],
                    "layout": "vertical",
                    "position": {"x": 620, "y": 0},
                    "size": {"width": 300, "height": 120},
                    "order": 1,
                },
                {
                    "id": "notes",
                    "type": "TEXTAREA",
                    "label": "Notes",
                    "rows": 4,
                    "validation": [
                        {"type": "maxLength", "value": 500, "message": "Notes must be 500 characters or fewer"}
                    ],
                    "position": {"x": 620, "y": 140},
                    "size": {"width": 400, "height": 120},
                    "order": 2,
                },
            ],
        },
    }),
    UITemplate.model_validate({
        "id": "image-review",
        "name": "Image Review",
        "description": "Reviewers rate an annotated image and explain rejections",
        "category": "image",
        "configuration": {
            "name": "Image Review",
            "pipelineMode": "REVIEW",
            "fileType": "IMAGE",
            "layout": {"type": "two-column", "columns": 2, "gap": 16},
            "widgets": [
                {
                    "id": "image",
                    "type": "FILE_VIEWER",
                    "label": "Image",
                    "fileType": "IMAGE",
                    "allowFullscreen": True,
                    "position": {"x": 0, "y": 0},
                    "size": {"width": 600, "height": 400},
                    "order": 0,
                },
                {
                    "id": "verdict",
                    "type": "SELECT",
                    "label": "Verdict",
                    "required": True,
                    "options": [
                        {"id": "opt-approve", "label": "Approve", "value": "approve"},
                        {"id": "opt-reject", "label": "Reject", "value": "reject"},
                    ],
                    "pipelineModes": ["REVIEW", "QUALITY_CHECK"],
                    "position": {"x": 620, "y": 0},
                    "size": {"width": 300, "height": 40},
                    "order": 1,
                },
                {
                    "id": "reason",
                    "type": "TEXTAREA",
                    "label": "Rejection reason",
                    "required": True,
                    "conditionalDisplay": [
                        {"field": "verdict", "operator": "equals", "value": "reject"}
                    ],
                    "position": {"x": 620, "y": 60},
                    "size": {"width": 400, "height": 120},
                    "order": 2,
                },
                {
                    "id": "quality",
                    "type": "RATING",
                    "label": "Annotation quality",
                    "maxRating": 5,
                    "position": {"x": 620, "y": 200},
                    "size": {"width": 200, "height": 40},
                    "order": 3,
                },
            ],
        },
    }),
]


def get_template(template_id: str) -> UITemplate | None:
    """Get a built-in template by id."""
    for template in BUILTIN_TEMPLATES:
        if template.id == template_id:
            return template
    return None


def new_configuration_id() -> str:
    return f"ui-config-{uuid4().hex[:12]}"


def blank_configuration(project_id: str, name: str = "New UI Configuration") -> Configuration:
    """Empty configuration a builder opens with."""
    return Configuration(
        id=new_configuration_id(),
        name=name,
        version=1,
        project_id=project_id,
        pipeline_mode=PipelineMode.ANNOTATION,
    )


def configuration_from_template(
    template: UITemplate,
    project_id: str,
    created_by: str | None = None,
) -> Configuration:
    """Instantiate ``template`` as a new configuration owned by ``project_id``."""
    body = template.configuration.model_dump(by_alias=False)
    body.update(id=new_configuration_id(), project_id=project_id)
    if created_by:
        body["metadata"] = {
            "created_by": created_by,
            "created_at": datetime.now(timezone.utc).isoformat(),
            "tags": [f"template:{template.id}"],
        }
    return Configuration.model_validate(body)
