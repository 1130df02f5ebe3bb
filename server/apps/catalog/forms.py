"""Forms for catalog app."""

from django import forms

from server.apps.attachments.forms import AttachmentFormMixin
from server.apps.catalog.models import Product


class ProductForm(AttachmentFormMixin, forms.ModelForm):
    """Create or edit a product together with its picture."""

    picture_upload = forms.ImageField(required=False)

    class Meta:
        """Form metadata."""

        model = Product
        fields = ['sku', 'name']
