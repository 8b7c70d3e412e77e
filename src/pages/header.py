from __future__ import annotations
import html
import time
from typing import Optional

from src.css.utils import load_css
from src.page_timing import log_timing

LOGO_URL = "/images/lookbook-logo.png"
SITE_TITLE = "Techstars Lookbook"

# (section, ((key, label, path), ...))
_NAV_SECTIONS: tuple[tuple[str, tuple[tuple[str, str, str], ...]], ...] = (
    (
        "People",
        (
            ("mentors", "Mentors", "/mentors/"),
            ("additional-mentors", "Additional mentors", "/additional-mentors/"),
        ),
    ),
    (
        "Portfolio",
        (("companies", "Companies", "/companies/"),),
    ),
)

# Detail pages highlight the listing they belong to.
_ACTIVE_ALIASES = {
    "/mentor-display": "mentors",
    "/founder-display": "companies",
    "/company-display": "companies",
}

_ICON_PATHS: dict[str, str] = {
    "mentors": (
        '<circle cx="9" cy="8" r="3.5"/>'
        '<path d="M2.5 20a6.5 6.5 0 0 1 13 0"/>'
        '<path d="M16 4.5a3.5 3.5 0 0 1 0 7"/>'
        '<path d="M18 14a6.5 6.5 0 0 1 3.5 6"/>'
    ),
    "additional-mentors": (
        '<circle cx="10" cy="8" r="3.5"/>'
        '<path d="M3.5 20a6.5 6.5 0 0 1 13 0"/>'
        '<path d="M19 8v6"/>'
        '<path d="M16 11h6"/>'
    ),
    "companies": (
        '<path d="M4 21V5a2 2 0 0 1 2-2h7a2 2 0 0 1 2 2v16"/>'
        '<path d="M15 9h3a2 2 0 0 1 2 2v10"/>'
        '<path d="M8 7h3"/>'
        '<path d="M8 11h3"/>'
        '<path d="M8 15h3"/>'
        '<path d="M2 21h20"/>'
    ),
}

FORCE_LIGHT_MODE_SCRIPT = """
<script>
(function() {
  const setLight = (el) => {
    if (!el) return;
    el.setAttribute("data-theme", "light");
    el.classList.remove("dark");
    el.style.colorScheme = "light";
  };
  const apply = () => {
    setLight(document.documentElement);
    setLight(document.body);
    document.querySelectorAll("gradio-app, .gradio-container").forEach(setLight);
    document.title = "__SITE_TITLE__";
  };
  apply();
  new MutationObserver(apply).observe(document.documentElement, { childList: true, subtree: true });
  try {
    localStorage.setItem("theme", "light");
  } catch (err) {}
})();
</script>
""".strip().replace("__SITE_TITLE__", SITE_TITLE)


def _active_key(path: str) -> str:
    normalized = (path or "/").rstrip("/") or "/"
    if normalized in _ACTIVE_ALIASES:
        return _ACTIVE_ALIASES[normalized]
    return normalized.lstrip("/")


def _nav_icon_markup(key: str) -> str:
    path = _ICON_PATHS.get(key, "")
    return (
        '<span class="sidebar-link-icon" aria-hidden="true">'
        f'<svg viewBox="0 0 24 24" focusable="false" aria-hidden="true">{path}</svg>'
        "</span>"
    )


def with_light_mode_head(head: Optional[str]) -> str:
    if head and head.strip():
        return f"{head}\n{FORCE_LIGHT_MODE_SCRIPT}"
    return FORCE_LIGHT_MODE_SCRIPT


def render_header(path: str = "/", request: object = None) -> str:
    start = time.perf_counter()
    active_key = _active_key(path)
    css = load_css("header.css")

    section_markup = []
    for section_label, links in _NAV_SECTIONS:
        items = []
        for key, label, href in links:
            is_active = key == active_key
            active_class = " is-active" if is_active else ""
            aria_current = ' aria-current="page"' if is_active else ""
            items.append(
                f'<a href="{html.escape(href)}" class="sidebar-link{active_class}"{aria_current} '
                f'title="{html.escape(label)}">{_nav_icon_markup(key)}'
                f'<span class="sidebar-link-text">{html.escape(label)}</span></a>'
            )
        section_markup.append(
            f"""
<details class="nav-section" open>
  <summary class="nav-section-title">{html.escape(section_label)}</summary>
  <div class="nav-section-links">{''.join(items)}</div>
</details>
""".strip()
        )

    html_value = f"""<style>
{css}
</style>
<div class="hdr-wrap" id="sidebar">
  <div class="hdr">
    <a href="/mentors/" class="site-logo" aria-label="Home">
      <img src="{LOGO_URL}" class="logo-img" alt="" />
      <span class="logo-text">{html.escape(SITE_TITLE)}</span>
    </a>
    <nav class="sidebar-nav" aria-label="Main navigation">
      {''.join(section_markup)}
    </nav>
  </div>
</div>
<div class="hdr-spacer"></div>
"""
    log_timing("header", "render_header", start, path=path or "/", html_bytes=len(html_value))
    return html_value
