"""Preview command implementation - template to standalone HTML page."""

from pathlib import Path

from profile_studio.commands.inputs import load_inputs
from profile_studio.config import load_config, merge_cli_overrides
from profile_studio.core.template import ColorScheme
from profile_studio.display import print_error, print_render_result, print_success, print_warning
from profile_studio.engine.renderer import render
from profile_studio.exceptions import ConfigurationError
from profile_studio.preview.images import ImageTracker
from profile_studio.preview.renderer import PreviewContext, render_output, render_preview_page


def preview_command(
    template_ref: str,
    profile_path: Path | None = None,
    username: str | None = None,
    output: Path = Path("preview.html"),
    theme: ColorScheme | None = None,
    base_url: str | None = None,
    as_markdown: bool = False,
    skeletons: bool = False,
) -> None:
    """Render a template to an HTML preview page.

    A failed render still writes a page showing the preview error node.

    Args:
        skeletons: Keep stats cards in their loading skeleton instead of
            embedding the images (the page is viewed offline)
    """
    template, profile = load_inputs(template_ref, profile_path, username)

    try:
        config = merge_cli_overrides(load_config(), theme=theme)
    except ConfigurationError as e:
        print_error(e.message)
        raise SystemExit(1) from None

    result = render(template, profile, config.render.to_options())

    images = ImageTracker(timeout=config.preview.image_timeout_seconds)
    context = PreviewContext(
        theme=result.output.context.theme if result.output else config.render.theme or "system",
        as_markdown=as_markdown,
        base_url=base_url,
        images=images,
    )

    if result.output is not None and not skeletons:
        # First pass registers every stats card; the browser loads them
        render_output(result.output, context)
        for image in images.pending():
            image.mark_loaded()

    page = render_preview_page(
        result.output, context, result.errors, title=f"{template.metadata.name} preview"
    )
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(page)

    if result.success:
        print_success(f"Preview written to {output}")
    else:
        print_render_result(result)
        print_warning(f"Render failed; preview page at {output} shows the error")
