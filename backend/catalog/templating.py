"""
Library Catalog Backend — Template Renderer
=============================================

What:  The shared Jinja2 environment used by route handlers and error handlers.
How:   fastapi.templating.Jinja2Templates with autoescaping (on by default for
       .html templates). Templates live in `settings.templates_dir`.
"""

from fastapi.templating import Jinja2Templates

from catalog.config import settings

templates = Jinja2Templates(directory=settings.templates_dir)
