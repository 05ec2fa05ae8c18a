"""HTML pages served for the landing page and for rejected paths."""

from __future__ import annotations

from string import Template
from typing import Literal

PageType = Literal["error", "warning", "info"]

HOME_MESSAGE = """
<p>This is <b>pxy-redirect</b> served at:<br><br><b>pxy.fi - /&#712;p&#594;ksify/</b></p>
<p>The purpose of pxy-redirect is to offer short links to the Clang diagnostics reference,
for pages which broke when a set of links got too long, this is a <i>really
<a href="https://dev.to/jonasbn/challenges-solutions-and-more-challenges-and-more-solutions-4j3f">long story</a></i>.</p>
<p>Links have the form <code>/&lt;major version&gt;/&lt;flag&gt;</code>, for example
<a href="/13/wall">/13/wall</a>.</p>
<p>For more documentation and information please see links below</p>
<ul>
<li><a href="https://github.com/jonasbn/pxy-redirect-ow-function">GitHub</a></li>
<li><a href="https://jonasbn.github.io/">Author</a></li>
</ul>
""".strip()

_ALERTS: dict[str, tuple[str, str, str]] = {
    # page type -> (alert class, icon class, heading)
    "error": ("alert-danger", "far fa-times-circle", "Error"),
    "warning": ("alert-warning", "fa fa-exclamation-triangle", "Warning"),
    "info": ("alert-info", "fa fa-info-circle", "Welcome"),
}

_PAGE = Template(
    """<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="UTF-8" />
    <title>pxy.fi</title>
    <link
      rel="stylesheet"
      href="https://cdnjs.cloudflare.com/ajax/libs/twitter-bootstrap/4.1.3/css/bootstrap.min.css"
    />
    <link
      rel="stylesheet"
      href="https://cdnjs.cloudflare.com/ajax/libs/font-awesome/5.11.2/css/all.min.css"
    />
    <style>
      body { background: #000e29; }
      .alert > .start-icon { margin-right: 5px; min-width: 20px; text-align: center; }
      .alert-simple { text-shadow: 2px 1px #00040a; transition: 0.5s; }
      .alert-simple.alert-info {
        border: 1px solid rgba(6, 44, 241, 0.46);
        background-color: rgba(7, 73, 149, 0.12);
        box-shadow: 0px 0px 2px #0396ff;
        color: #0396ff;
      }
      .alert-simple.alert-warning {
        border: 1px solid rgba(241, 142, 6, 0.81);
        background-color: rgba(220, 128, 1, 0.16);
        box-shadow: 0px 0px 2px #ffb103;
        color: #ffb103;
      }
      .alert-simple.alert-danger {
        border: 1px solid rgba(241, 6, 6, 0.81);
        background-color: rgba(220, 17, 1, 0.16);
        box-shadow: 0px 0px 2px #ff0303;
        color: #ff0303;
      }
      .alert-danger > p > a { color: #ff0303; }
      .my-times { animation: blink-1 2s infinite both; }
      @keyframes blink-1 {
        0%, 50%, 100% { opacity: 1; }
        25%, 75% { opacity: 0; }
      }
    </style>
  </head>
  <body>
    <section>
      <div class="container mt-5">
        <div class="row">
          <div class="col-sm-12">
            <div class="alert alert-simple $alert_class text-left" role="alert">
              <i class="start-icon $icon_class"></i>
              <strong>$heading</strong> $message
            </div>
          </div>
        </div>
      </div>
    </section>
  </body>
</html>
"""
)


def render_page(message: str, page_type: PageType = "info") -> str:
    """Render a full HTML document around ``message``.

    ``message`` is inserted verbatim and must already be HTML-safe.
    """
    alert_class, icon_class, heading = _ALERTS.get(page_type, _ALERTS["info"])
    return _PAGE.substitute(
        alert_class=alert_class,
        icon_class=icon_class,
        heading=heading,
        message=message,
    )


__all__ = ["HOME_MESSAGE", "PageType", "render_page"]
