"""scaffold-next-pro project enhancer -- layers production configuration onto a baseline Next.js app.

This package renders every generated file from Jinja2 templates and writes
them into the directory produced by ``create-next-app``, patching the few
baseline files it has to edit in place.

Quick usage::

    from scaffold_next_pro.scaffolder import ProjectEnhancer

    enhancer = ProjectEnhancer("/tmp/my-app", ["stripe", "ai"])
    report = await enhancer.enhance()
"""

from scaffold_next_pro.scaffolder.enhancer import EnhanceReport, ProjectEnhancer
from scaffold_next_pro.scaffolder.manifest import generate_package_json
from scaffold_next_pro.scaffolder.templates import Fragment, TemplateOutput, TemplateRenderer

__all__ = [
    "EnhanceReport",
    "Fragment",
    "ProjectEnhancer",
    "TemplateOutput",
    "TemplateRenderer",
    "generate_package_json",
]
