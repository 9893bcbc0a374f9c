import logging
from typing import Mapping, Optional

from fastapi import status
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from markupsafe import escape

from .crud import UserRepository
from .domain import User
from .template import Template
from .validation import UserValidator

logger = logging.getLogger(__name__)

PAGE_TEMPLATE = "users.html"


class UserController:
    """Handles one request against the name list.

    A valid POST stores the name and redirects back to the list
    (Post/Redirect/Get). Everything else renders the page.
    """

    def __init__(
        self,
        repository: UserRepository,
        validator: UserValidator,
        template: Template,
        title: str = "Users",
        redirect_to: str = "/",
    ) -> None:
        self.repository = repository
        self.validator = validator
        self.template = template
        self.title = title
        self.redirect_to = redirect_to

    def handle(self, method: str, form: Optional[Mapping[str, str]] = None) -> Response:
        error = None

        if method.upper() == "POST":
            value = (form or {}).get("name")
            # A file part named "name" is not a text field; treat it as missing.
            name = value if isinstance(value, str) else ""
            result = self.validator.check(name)
            if result.ok:
                self.repository.add(User(name=name))
                logger.info("Added user name (%d chars)", len(name))
                return RedirectResponse(url=self.redirect_to, status_code=status.HTTP_303_SEE_OTHER)

            logger.warning("Rejected submission: %s", result.msg)
            error = result.msg

        return HTMLResponse(self.render_page(error))

    def render_page(self, error: Optional[str] = None) -> str:
        items = [f"<li>{escape(user.name)}</li>" for user in self.repository.all()]
        error_block = f'<p class="error">{escape(error)}</p>' if error else ""

        body = self.template.load(PAGE_TEMPLATE)
        return self.template.render(
            body,
            {
                "title": escape(self.title),
                "items": "\n".join(items),
                "error": error_block,
            },
        )
