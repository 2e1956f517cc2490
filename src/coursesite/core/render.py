'''
HTML rendering of the site chrome: layout, navbar, sidebar, footer and highlight styles.
'''

from dataclasses import dataclass, field
import datetime
import logging
from typing import Any, Dict, Final, List, Mapping, Optional, Sequence

from jinja2 import DictLoader, Environment, StrictUndefined, select_autoescape
from markupsafe import Markup
from pygments.formatters import HtmlFormatter

from coursesite.config import HighlightConfig, SiteConfig
from coursesite.core import urls
from coursesite.core.content import Document
from coursesite.sidebars import Category, Sidebar, Sidebars, contains_doc, iter_doc_ids

logger = logging.getLogger('coursesite')

STYLESHEET: Final[str] = 'assets/site.css'

LAYOUT_TEMPLATE: Final[str] = '''<!DOCTYPE html>
<html lang="{{ config.i18n.default_locale }}" data-theme="{{ config.color_mode.default_mode }}">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>{{ page_title }}</title>
  {%- if description %}
  <meta name="description" content="{{ description }}">
  {%- endif %}
  <link rel="canonical" href="{{ canonical }}">
  {%- if config.image %}
  <meta property="og:image" content="{{ config.url }}{{ asset_url(config.image) }}">
  {%- endif %}
  {%- if config.favicon %}
  <link rel="icon" href="{{ asset_url(config.favicon) }}">
  {%- endif %}
  <link rel="stylesheet" href="{{ asset_url(stylesheet) }}">
  {%- if config.color_mode.respect_prefers_color_scheme %}
  <script>
    if (window.matchMedia) {
      document.documentElement.dataset.theme =
        window.matchMedia('(prefers-color-scheme: dark)').matches ? 'dark' : 'light';
    }
  </script>
  {%- endif %}
</head>
<body>
  <nav class="navbar">
    <a class="navbar__brand" href="{{ url_for('/') }}">
      {%- if config.navbar.logo %}
      <img class="navbar__logo" src="{{ asset_url(config.navbar.logo.src) }}" alt="{{ config.navbar.logo.alt }}">
      {%- endif %}
      <b class="navbar__title">{{ config.navbar.title or config.title }}</b>
    </a>
    {%- for position in ('left', 'right') %}
    <div class="navbar__items navbar__items--{{ position }}">
      {%- for item in navbar if item.position == position %}
      <a class="navbar__link{% if item.active %} navbar__link--active{% endif %}" href="{{ item.href }}"
         {%- if item.external %} target="_blank" rel="noopener noreferrer"{% endif %}>{{ item.label }}</a>
      {%- endfor %}
    </div>
    {%- endfor %}
  </nav>
  {% block main %}{% endblock %}
  <footer class="footer footer--{{ config.footer.style }}">
    <div class="footer__links">
      {%- for group in footer %}
      <div class="footer__col">
        <div class="footer__title">{{ group.title }}</div>
        <ul class="footer__items">
          {%- for link in group.items %}
          <li><a class="footer__link" href="{{ link.href }}"
                 {%- if link.external %} target="_blank" rel="noopener noreferrer"{% endif %}>{{ link.label }}</a></li>
          {%- endfor %}
        </ul>
      </div>
      {%- endfor %}
    </div>
    {%- if copyright %}
    <div class="footer__copyright">{{ copyright }}</div>
    {%- endif %}
  </footer>
</body>
</html>
'''

DOC_TEMPLATE: Final[str] = '''{% extends "layout.html" %}
{% block main %}
<div class="doc-page">
  {%- if sidebar %}
  <aside class="doc-sidebar">
    <nav class="menu">
      <ul class="menu__list">
        {%- for item in sidebar recursive %}
        <li class="menu__list-item">
          {%- if item.kind == 'category' %}
          <details class="menu__category"{% if item.open %} open{% endif %}>
            <summary class="menu__caret">{{ item.label }}</summary>
            <ul class="menu__list">{{ loop(item.items) }}</ul>
          </details>
          {%- else %}
          <a class="menu__link{% if item.active %} menu__link--active{% endif %}" href="{{ item.href }}"
             {%- if item.active %} aria-current="page"{% endif %}>{{ item.label }}</a>
          {%- endif %}
        </li>
        {%- endfor %}
      </ul>
    </nav>
  </aside>
  {%- endif %}
  <main class="doc-main">
    <article class="markdown">
      {%- if not document.has_heading %}
      <h1>{{ document.title }}</h1>
      {%- endif %}
      {{ body }}
    </article>
    {%- if previous or next %}
    <nav class="pagination-nav">
      {%- if previous %}
      <a class="pagination-nav__link pagination-nav__link--prev" href="{{ previous.href }}">
        <div class="pagination-nav__sublabel">Previous</div>
        <div class="pagination-nav__label">{{ previous.label }}</div>
      </a>
      {%- endif %}
      {%- if next %}
      <a class="pagination-nav__link pagination-nav__link--next" href="{{ next.href }}">
        <div class="pagination-nav__sublabel">Next</div>
        <div class="pagination-nav__label">{{ next.label }}</div>
      </a>
      {%- endif %}
    </nav>
    {%- endif %}
  </main>
  {%- if toc %}
  <aside class="doc-toc">
    <ul class="table-of-contents">
      {%- for entry in toc recursive %}
      <li><a href="#{{ entry.id }}">{{ entry.name|safe }}</a>
        {%- if entry.children %}<ul>{{ loop(entry.children) }}</ul>{% endif %}</li>
      {%- endfor %}
    </ul>
  </aside>
  {%- endif %}
</div>
{% endblock %}
'''

TEMPLATES: Final[Dict[str, str]] = {
    'layout.html': LAYOUT_TEMPLATE,
    'doc.html': DOC_TEMPLATE,
}


@dataclass(frozen=True)
class LinkView:
    label: str
    href: str
    external: bool = False
    active: bool = False
    position: str = 'left'
    kind: str = 'link'


@dataclass(frozen=True)
class CategoryView:
    label: str
    items: Sequence[Any] = ()
    open: bool = False
    kind: str = 'category'


@dataclass(frozen=True)
class FooterGroupView:
    title: str
    items: Sequence[LinkView] = field(default_factory=list)


def create_environment(config: SiteConfig) -> Environment:
    '''
    Creates the Jinja2 environment used for every page of a site.

    The environment exposes ``url_for`` and ``asset_url`` bound to the site configuration,
    so templates never assemble links on their own.
    '''
    env = Environment(loader=DictLoader(TEMPLATES),
                      autoescape=select_autoescape(default=True, default_for_string=True),
                      undefined=StrictUndefined,
                      trim_blocks=False, lstrip_blocks=False)
    env.globals.update(
        config=config,
        stylesheet=STYLESHEET,
        url_for=lambda path: urls.url_for(config, path),
        asset_url=lambda path: urls.asset_url(config, path),
    )
    return env


def sidebar_view(config: SiteConfig, sidebar: Sidebar, documents: Mapping[str, Document],
                 active_doc_id: Optional[str] = None) -> List[Any]:
    '''
    Converts a sidebar taxonomy into the nested view rendered by the doc template, keeping
    the declared order. Categories holding the active document are always expanded.
    '''
    views: List[Any] = []
    for item in sidebar:
        if isinstance(item, Category):
            expanded = not item.collapsed or (active_doc_id is not None
                                              and contains_doc(item, active_doc_id))
            views.append(CategoryView(item.label,
                                      sidebar_view(config, item.items, documents,
                                                   active_doc_id),
                                      open=expanded))
        else:
            document = documents.get(item)
            label = document.sidebar_label if document else item
            views.append(LinkView(label, urls.url_for(config, urls.route_for_doc(config, item)),
                                  active=item == active_doc_id))
    return views


def first_doc_of(sidebars: Sidebars, sidebar_id: str) -> Optional[str]:
    return next(iter_doc_ids(sidebars.get(sidebar_id, ())), None)


def navbar_view(config: SiteConfig, sidebars: Sidebars,
                active_sidebar_id: Optional[str] = None) -> List[LinkView]:
    views: List[LinkView] = []
    for item in config.navbar.items:
        if item.sidebar_id:
            first_doc = first_doc_of(sidebars, item.sidebar_id)
            if first_doc is None:
                logger.debug(f'Skipping navbar item "{item.label}", sidebar '
                             f'"{item.sidebar_id}" has no documents')
                continue
            href = urls.url_for(config, urls.route_for_doc(config, first_doc))
        else:
            href = urls.url_for(config, item.to or item.href or '')
        views.append(LinkView(item.label, href, external=item.is_external,
                              active=item.sidebar_id is not None
                              and item.sidebar_id == active_sidebar_id,
                              position=item.position))
    return views


def footer_view(config: SiteConfig) -> List[FooterGroupView]:
    return [FooterGroupView(group.title,
                            [LinkView(link.label, urls.url_for(config, link.to or link.href or ''),
                                      external=link.is_external)
                             for link in group.items])
            for group in config.footer.links]


def page_context(config: SiteConfig, sidebars: Sidebars, route: str, page_title: str,
                 description: Optional[str] = None,
                 active_sidebar_id: Optional[str] = None) -> Dict[str, Any]:
    return {
        'page_title': page_title,
        'description': description,
        'canonical': urls.absolute_url(config, route),
        'navbar': navbar_view(config, sidebars, active_sidebar_id=active_sidebar_id),
        'footer': footer_view(config),
        'copyright': config.footer.render_copyright(datetime.date.today().year),
    }


def render_doc_page(env: Environment, config: SiteConfig, sidebars: Sidebars,
                    document: Document, body: str, route: str,
                    sidebar_id: Optional[str] = None,
                    documents: Mapping[str, Document] = {},
                    toc: Sequence[Dict[str, Any]] = (),
                    previous_link: Optional[LinkView] = None,
                    next_link: Optional[LinkView] = None) -> str:
    sidebar = sidebar_view(config, sidebars[sidebar_id], documents,
                           active_doc_id=document.doc_id) if sidebar_id else []
    return env.get_template('doc.html').render(
        document=document,
        body=Markup(body),
        sidebar=sidebar,
        toc=toc,
        previous=previous_link,
        next=next_link,
        **page_context(config, sidebars, route, f'{document.title} | {config.title}',
                       description=document.front_matter.get('description'),
                       active_sidebar_id=sidebar_id),
    )


def render_highlight_css(highlight: HighlightConfig) -> str:
    '''
    Returns the Pygments rules of both highlight themes, each scoped to its color mode.
    '''
    rules = []
    for mode, style in (('light', highlight.theme), ('dark', highlight.dark_theme)):
        formatter = HtmlFormatter(style=style, cssclass='highlight')
        rules.append(f'/* {mode}: {style} */\n'
                     + formatter.get_style_defs(f'[data-theme="{mode}"] .highlight'))
    return '\n'.join(rules) + '\n'
