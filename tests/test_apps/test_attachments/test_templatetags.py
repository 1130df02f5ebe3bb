"""Tests for attachments template filters."""

from django.template import Context, Template

from server.apps.catalog.models import Manual, Product


def _render(template, **context):
    return Template('{% load attachments %}' + template).render(Context(context))


def test_attachment_url(attachments_root):
    """Test rendering the URL of a stored file."""
    folder = attachments_root / 'products'
    folder.mkdir()
    (folder / '7_thumb.png').write_bytes(b'thumb')
    product = Product(sku='7')

    rendered = _render('{{ p.picture|attachment_url:"thumb" }}', p=product)

    assert rendered.startswith('https://example.com/media/products/7_thumb.png?_=')


def test_attachment_url_missing_file(attachments_root):
    """Test rendering nothing when there is no file nor placeholder."""
    rendered = _render('{{ p.picture|attachment_url }}', p=Product(sku='7'))

    assert rendered == ''


def test_attachment_url_unsaved_owner(attachments_root):
    """Test an owner without identity renders the placeholder."""
    folder = attachments_root / 'products'
    folder.mkdir()
    (folder / 'placeholder.png').write_bytes(b'placeholder')

    rendered = _render('{{ p.picture|attachment_url }}', p=Product())

    assert rendered.startswith(
        'https://example.com/media/products/placeholder.png?_=',
    )


def test_attachment_url_unsaved_owner_without_default(attachments_root):
    """Test rendering nothing for an owner without identity nor default."""
    rendered = _render('{{ m.document|attachment_url }}', m=Manual())

    assert rendered == ''


def test_attachment_url_not_a_manager():
    """Test other values render nothing."""
    assert _render('{{ value|attachment_url }}', value='7.png') == ''
