"""create-rmv-site - Kirby CMS projects with Tailwind CSS v4, jQuery and Fancybox."""

__version__ = "1.0.1"
