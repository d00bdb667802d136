"""Template engine for generated files and the setup summary."""
from typing import Any, Dict

from jinja2 import BaseLoader, Environment, TemplateError

from rmvsite.core.errors import SetupError

BANNER = r"""
   _____             __        ___  __  ____   __  _____ __
  / ___/______ ___ _/ /____   / _ \/  |/  / | / / / __(_) /____
 / /__/ __/ -_) _ `/ __/ -_) / , _/ /|_/ /| |/ / _\ \/ / __/ -_)
 \___/_/  \__/\_,_/\__/\__/ /_/|_/_/  /_/ |___/ /___/_/\__/\__/
"""

TEMPLATES: Dict[str, str] = {
    "processing.css": """
@import "tailwindcss";

/* Fancybox styles */
@import "@fancyapps/ui/dist/fancybox/fancybox.css";
""",
    "main.js": """
import jQuery from 'jquery';
import { Fancybox } from "@fancyapps/ui";

window.$ = window.jQuery = jQuery;

// Initialize Fancybox
Fancybox.bind("[data-fancybox]", {
  // Your custom options here
});

console.log('jQuery and Fancybox initialized.');

// Your custom JavaScript code here
""",
    "summary": """
Your Kirby project '{{ name }}' with Tailwind CSS v4,
Typography plugin, jQuery, and Fancybox is ready in:
{{ project_dir }}

Available npm scripts:
{% for script, description in scripts.items() %}
  - npm run {{ script }}: {{ description }}
{% endfor %}

Remember to include the generated CSS and your JS file
in your Kirby templates (e.g., in a snippet):

PHP Snippet:
  <?= css('{{ css_output }}') ?>
  <?php /* Consider using a JS bundler like Vite or esbuild for production builds */ ?>
  <?= js('assets/js/main.js', ['type' => 'module']) ?>

To use the Typography plugin, add the "prose" class to your content container.
To use Fancybox, add the "data-fancybox" attribute to your lightbox elements (e.g., <a> tags).

Next steps:
  1. cd {{ name }}
  2. npm run watch (to start developing)
  3. Configure Kirby (e.g., config.php, user accounts)
  4. Start building your awesome site!
""",
}


class TemplateEngine:
    """Renders the built-in templates with Jinja2."""

    def __init__(self):
        self.jinja_env = Environment(
            loader=BaseLoader(),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a template with given context.

        Raises:
            SetupError: If the template is unknown or fails to render
        """
        source = TEMPLATES.get(template_name)
        if source is None:
            raise SetupError(f"Unknown template: {template_name}", step="render")

        try:
            return self.jinja_env.from_string(source).render(**context).strip()
        except TemplateError as e:
            raise SetupError(f"Failed to render {template_name}: {e}", step="render") from e
