'''
The course landing page: a hero banner, a feature grid and the course outline.
'''

from dataclasses import dataclass
from typing import Final, Sequence

from jinja2 import Environment

from coursesite.config import SiteConfig
from coursesite.core import render
from coursesite.sidebars import Sidebars

PAGE_TITLE: Final[str] = 'Learn Vue Component Libraries'
PAGE_DESCRIPTION: Final[str] = ('A comprehensive course on building and sharing Vue component '
                                'libraries internally using GitLab Package Registry')


@dataclass(frozen=True)
class FeatureItem:
    icon: str
    title: str
    description: str


@dataclass(frozen=True)
class OutlineStep:
    title: str
    description: str


@dataclass(frozen=True)
class HeroAction:
    label: str
    to: str
    primary: bool = True


FEATURE_LIST: Final[Sequence[FeatureItem]] = (
    FeatureItem('🧩', 'Build Reusable Components',
                'Learn to create a Vue 3 component library with TypeScript, proper exports, '
                'and tree-shaking support using Vite.'),
    FeatureItem('🦊', 'GitLab Package Registry',
                "Publish your library to GitLab's npm registry for secure, internal "
                'distribution within your organization.'),
    FeatureItem('🔐', 'Secure & Private',
                'Keep your components internal with proper authentication, access controls, '
                'and scoped packages.'),
    FeatureItem('⚡', 'CI/CD Automation',
                'Automate versioning, building, and publishing with GitLab CI/CD pipelines for '
                'seamless releases.'),
)

COURSE_OUTLINE: Final[Sequence[OutlineStep]] = (
    OutlineStep('Project Setup',
                'Initialize a Vue 3 + TypeScript + Vite project configured for library '
                'development.'),
    OutlineStep('Create Components',
                'Build reusable, well-documented components with props, events, and slots.'),
    OutlineStep('Configure Build',
                'Set up Vite for library mode with proper entry points and type declarations.'),
    OutlineStep('Publish to GitLab',
                'Configure npm for GitLab registry and publish your first package version.'),
)

HERO_ACTIONS: Final[Sequence[HeroAction]] = (
    HeroAction('🚀 Start Learning', '/intro'),
    HeroAction('📖 Jump to Setup', '/building-library/project-setup', primary=False),
)

CODE_PREVIEW_TITLE: Final[str] = 'package.json'
CODE_PREVIEW: Final[str] = '''{
  "name": "@myorg/vue-components",
  "version": "1.0.0",
  "publishConfig": {
    "registry": "https://gitlab.com/api/v4/..."
  }
}'''

HOME_TEMPLATE: Final[str] = '''{% extends "layout.html" %}
{% block main %}
<header class="hero hero--banner">
  <div class="container hero__content">
    <div class="hero__text">
      <h1 class="hero__title">{{ config.title }}</h1>
      <p class="hero__subtitle">{{ config.tagline }}</p>
      <div class="hero__buttons">
        {%- for action in actions %}
        <a class="button button--lg{% if not action.primary %} button--outline{% endif %}"
           href="{{ url_for(action.to) }}">{{ action.label }}</a>
        {%- endfor %}
      </div>
    </div>
    <div class="hero__visual">
      <div class="code-preview">
        <div class="code-preview__header">
          <span class="code-preview__dot" style="background: #ff5f56"></span>
          <span class="code-preview__dot" style="background: #ffbd2e"></span>
          <span class="code-preview__dot" style="background: #27ca40"></span>
          <span class="code-preview__title">{{ code_title }}</span>
        </div>
        <pre class="code-preview__block">{{ code }}</pre>
      </div>
    </div>
  </div>
</header>
<main>
  <section class="features">
    <div class="container">
      <h2 class="section-title">What You'll Learn</h2>
      <div class="row">
        {%- for feature in features %}
        <div class="col col--3">
          <div class="feature-card">
            <div class="feature-card__icon">{{ feature.icon }}</div>
            <h3 class="feature-card__title">{{ feature.title }}</h3>
            <p class="feature-card__description">{{ feature.description }}</p>
          </div>
        </div>
        {%- endfor %}
      </div>
    </div>
  </section>
  <section class="outline">
    <div class="container">
      <h2 class="section-title">Course Outline</h2>
      <div class="outline-grid">
        {%- for step in outline %}
        <div class="outline-card">
          <div class="outline-card__number">{{ '%02d' % loop.index }}</div>
          <h3>{{ step.title }}</h3>
          <p>{{ step.description }}</p>
        </div>
        {%- endfor %}
      </div>
    </div>
  </section>
</main>
{% endblock %}
'''


def render_home(env: Environment, config: SiteConfig, sidebars: Sidebars,
                features: Sequence[FeatureItem] = FEATURE_LIST,
                outline: Sequence[OutlineStep] = COURSE_OUTLINE,
                actions: Sequence[HeroAction] = HERO_ACTIONS) -> str:
    '''
    Renders the landing page.

    The hero banner reads the title and tagline from the site configuration, so renaming
    the site needs no change here.

    Parameters:
        env: Environment created by `coursesite.core.render.create_environment`.
        config: Site configuration.
        sidebars: Sidebars used to resolve navbar links.
        features: Cards of the "What You'll Learn" grid, in display order.
        outline: Steps of the course outline, numbered from 01 in display order.
        actions: Call-to-action links of the hero banner.

    Returns:
        The page markup.
    '''
    template = env.from_string(HOME_TEMPLATE)
    return template.render(features=features, outline=outline, actions=actions,
                           code_title=CODE_PREVIEW_TITLE, code=CODE_PREVIEW,
                           **render.page_context(config, sidebars, '/',
                                                 f'{PAGE_TITLE} | {config.title}',
                                                 description=PAGE_DESCRIPTION))
