"""Main CLI application using Cyclopts.

The search command is a thin HTTP client; all search logic lives in the server.
"""

import cyclopts

from genetrees.cli.commands import search, server

app = cyclopts.App(
    name="genetrees",
    help="Gene trees search service - CLI",
)

app.command(search.app, name="search")
app.command(server.app, name="server")
