import os
from dataclasses import dataclass


@dataclass(frozen=True)
class StorefrontWidget:
    identifier: str
    title: str
    template_uri: str
    html: str


BASE_DIR = os.path.dirname(os.path.abspath(__file__))
HTML_PATH = os.path.join(BASE_DIR, "widget_html.html")

with open(HTML_PATH, "r", encoding="utf-8") as f:
    STOREFRONT_HTML = f.read()


widget = StorefrontWidget(
    identifier="storefront-widget",
    title="Coin Shop",
    template_uri="ui://widget/storefront.html",
    html=STOREFRONT_HTML,
)
