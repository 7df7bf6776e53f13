from __future__ import annotations

from pathlib import Path

STYLESHEET_TAG = '<link rel="stylesheet" href="/assets/css/style.css">'
THEME_SCRIPT_TAG = '<script src="/assets/js/theme.js"></script>'
LANGUAGE_SCRIPT_TAG = '<script src="/assets/js/language.js"></script>'

# Clean route -> file under the public dir.
SITE_PAGES: dict[str, str] = {
    "/": "index.html",
    "/status": "status.html",
    "/politica-privacidade": "politica-privacidade.html",
    "/termos": "termos.html",
    "/documentacao": "documentacao.html",
}


def inject_site_assets(html: str) -> str:
    """Add the stylesheet and theme/language switcher tags a page is missing."""
    out = html
    if "style.css" not in out and "</head>" in out:
        out = out.replace("</head>", f"  {STYLESHEET_TAG}\n  </head>", 1)
    if "theme.js" not in out and "</body>" in out:
        out = out.replace("</body>", f"  {THEME_SCRIPT_TAG}\n  </body>", 1)
    if "language.js" not in out and "</body>" in out:
        out = out.replace("</body>", f"  {LANGUAGE_SCRIPT_TAG}\n  </body>", 1)
    return out


def resolve_public_file(public_dir: Path, relative: str) -> Path | None:
    """Return the file under public_dir, or None if absent or outside it."""
    root = public_dir.resolve()
    candidate = (root / relative.lstrip("/")).resolve()
    if not candidate.is_relative_to(root):
        return None
    if not candidate.is_file():
        return None
    return candidate


def render_page(public_dir: Path, filename: str) -> str | None:
    path = resolve_public_file(public_dir, filename)
    if path is None:
        return None
    return inject_site_assets(path.read_text(encoding="utf-8"))
