import pytest

from mdpanel.markdown.slug import slugify_github


@pytest.mark.parametrize("title, slug", [
    ("Getting Started", "getting-started"),
    ("Hello, World!", "hello-world"),
    ("  Leading and trailing  ", "leading-and-trailing"),
    ("API v2.0 (beta)", "api-v20-beta"),
    ("snake_case stays", "snake_case-stays"),
    ("Установка пакета", "установка-пакета"),
    ("--dashes--", "dashes"),
    ("", ""),
])
def test_slugify_github(title, slug):
    assert slugify_github(title) == slug
