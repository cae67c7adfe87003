"""Main CLI application using Cyclopts."""

import cyclopts

from dehug.cli.commands import config, discover, downloads, show, status, upload

app = cyclopts.App(
    name="dehug",
    help="DeHug - discover and publish datasets and models on the content registry",
)

app.command(discover.app, name="discover")
app.command(show.app, name="show")
app.command(upload.app, name="upload")
app.command(downloads.app, name="downloads")
app.command(status.app, name="status")
app.command(config.app, name="config")
