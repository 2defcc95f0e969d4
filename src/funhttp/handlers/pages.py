"""
=============================================================================
PAGE HANDLERS: /, /random, /file/<path>
=============================================================================

The handlers that only need the file system:

    /              root.html with ${links} replaced by the endpoint list
    /random        index.html served as-is
    /file/<path>   existence check only; no file content is ever served

=============================================================================
"""

import logging

from ..external import FileSystem
from ..http.errors import NotFoundError, ServerError
from ..http.response import HTTPResponse, ok_html


logger = logging.getLogger(__name__)


LINKS_PLACEHOLDER = "${links}"

FALLBACK_ROOT_PAGE = "<html><body><h1>Welcome to the WebServer</h1></body></html>"

FILE_PLACEHOLDER_MESSAGE = (
    "Would theoretically be a file but removed this part, "
    "you do not have to do anything with it for the assignment"
)


def build_endpoint_docs() -> str:
    """
    Build the HTML endpoint listing shown on the root page.

    Returns:
        An <h2> heading followed by a <ul> with one entry per endpoint.
    """
    items = [
        "<li><strong>Root:</strong> / - Displays this help page.</li>",
        "<li><strong>Random Image (HTML):</strong> /random - Displays a random image page.</li>",
        "<li><strong>Random Image (JSON):</strong> /json - Returns JSON for a random image.</li>",
        "<li><strong>File Serving:</strong> /file/filename - Returns file contents if it exists.</li>",
        "<li><strong>Multiply:</strong> /multiply?num1=3&num2=4 - Multiplies two numbers.</li>",
        "<li><strong>GitHub:</strong> /github?query=users/amehlhase316/repos"
        " - Fetches GitHub repository data.</li>",
        "<li><strong>Weather:</strong> /weather?city=Phoenix&units=metric"
        " - Fetches weather data for a city. "
        "Parameters: <em>city</em> (e.g., Phoenix) and <em>units</em>"
        " (<code>metric</code> or <code>imperial</code>).</li>",
        "<li><strong>Countdown Timer:</strong> /countdown?seconds=10&message=Time%27s%20up"
        " - Displays a countdown timer from the specified seconds and shows the"
        " provided message when finished.</li>",
    ]
    return "<h2>Available Endpoints</h2><ul>" + "".join(items) + "</ul>"


class RootPageHandler:
    """
    Serves the help page.

    The template is read on every request so edits to root.html show up
    without a restart. A missing or unreadable template is not an error:
    a built-in page is used instead.
    """

    def __init__(self, files: FileSystem, template: str = "root.html"):
        self.files = files
        self.template = template
        self._docs = build_endpoint_docs()

    def handle(self, target: str) -> HTTPResponse:
        try:
            page = self.files.read_text(self.template)
        except OSError as e:
            logger.warning(f"Cannot read {self.template}, using built-in page: {e}")
            page = FALLBACK_ROOT_PAGE

        return ok_html(page.replace(LINKS_PLACEHOLDER, self._docs))


class RandomPageHandler:
    """Serves index.html, the page that shows a random image."""

    def __init__(self, files: FileSystem, page: str = "index.html"):
        self.files = files
        self.page = page

    def handle(self, target: str) -> HTTPResponse:
        try:
            return ok_html(self.files.read_text(self.page))
        except OSError as e:
            raise ServerError(f"Cannot read page '{self.page}': {e}") from e


class FileLookupHandler:
    """
    Answers /file/<path> with whether <path> exists.

    Every "file/" in the target is removed, not just a prefix, since the
    route is matched by substring:

        "file/notes.txt"         → "notes.txt"
        "docs/file/a/file/b"     → "docs/a/b"
    """

    MARKER = "file/"

    def __init__(self, files: FileSystem):
        self.files = files

    def handle(self, target: str) -> HTTPResponse:
        name = target.replace(self.MARKER, "")

        if name and self.files.exists(name):
            return ok_html(FILE_PLACEHOLDER_MESSAGE)

        raise NotFoundError(f"File not found: {name}")
