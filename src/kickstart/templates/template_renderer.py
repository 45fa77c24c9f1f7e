"""Render Jinja2 templates bundled in a package's ``templates`` subpackage."""

import importlib.resources

import jinja2


def render_template(template_name: str, *, package: str, **kwargs) -> str:
    """Render ``<package>.templates/<template_name>`` with the given variables.

    Undefined variables raise instead of rendering as empty strings, and
    the template's trailing newline is kept so generated files end cleanly.

    Args:
        template_name: Template filename (e.g. "rubocop.yml.j2")
        package: The caller's package (pass __package__).
        **kwargs: Template variables.

    Raises:
        FileNotFoundError: If the template does not exist.
    """
    resource = importlib.resources.files(f"{package}.templates").joinpath(template_name)
    if not resource.is_file():
        raise FileNotFoundError(f"Template not found: {package}.templates/{template_name}")
    source = resource.read_text(encoding="utf-8")
    env = jinja2.Environment(
        undefined=jinja2.StrictUndefined,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        autoescape=False,
    )
    return env.from_string(source).render(**kwargs)
