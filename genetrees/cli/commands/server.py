"""Server command."""

import cyclopts
import uvicorn

app = cyclopts.App(name="server", help="Run the search server")


@app.default
def server(host: str = "0.0.0.0", port: int = 8000) -> None:
    """Run the gene trees search server in the foreground.

    Args:
        host: Host to bind to.
        port: Port to listen on.
    """
    uvicorn.run(
        "genetrees.application.api.rest.app:create_app",
        factory=True,
        host=host,
        port=port,
    )
