"""HTML pages served by the upload frontend."""

from __future__ import annotations

from html import escape


def _layout(base_path: str, body: str) -> str:
    stylesheet = escape(f"{base_path}/css/style.css", quote=True)
    return (
        "<!DOCTYPE html>\n"
        "<html>\n<head>\n"
        '<meta charset="utf-8">\n'
        "<title>Mac Login Wallpaper</title>\n"
        f'<link rel="stylesheet" href="{stylesheet}">\n'
        "</head>\n<body>\n"
        f"{body}\n"
        "</body>\n</html>\n"
    )


def render_index(base_path: str, field: str) -> str:
    """Return the upload form page."""

    action = escape(f"{base_path}/upload", quote=True)
    body = (
        '<main class="container">\n'
        "<h1>Mac Login Wallpaper</h1>\n"
        "<p>Upload a JPEG or PNG image to convert it into a login window wallpaper.</p>\n"
        f'<form action="{action}" method="post" enctype="multipart/form-data">\n'
        f'<input type="file" name="{escape(field, quote=True)}" accept="image/png,image/jpeg" required>\n'
        '<button type="submit">Convert</button>\n'
        "</form>\n"
        "</main>"
    )
    return _layout(base_path, body)


def render_upload_result(base_path: str, png_url: str) -> str:
    """Return the page linking to the converted wallpaper."""

    href = escape(png_url, quote=True)
    body = (
        '<main class="container">\n'
        "<h1>Your wallpaper is ready</h1>\n"
        f'<p><a href="{href}">{escape(png_url)}</a></p>\n'
        "</main>"
    )
    return _layout(base_path, body)
