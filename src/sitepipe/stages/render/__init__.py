from .template import (
    TemplateInput,
    TemplateSource,
    TemplateSourceAdapter,
    TemplateStage,
    TemplateState,
    build_template_environment,
)

__all__ = [
    "TemplateInput",
    "TemplateSource",
    "TemplateSourceAdapter",
    "TemplateStage",
    "TemplateState",
    "build_template_environment",
]
