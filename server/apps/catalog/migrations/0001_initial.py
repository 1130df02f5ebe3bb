import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Product',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('sku', models.CharField(max_length=32, unique=True)),
                ('name', models.CharField(max_length=255)),
            ],
            options={
                'verbose_name': 'Product',
                'verbose_name_plural': 'Products',
                'ordering': ['sku'],
            },
        ),
        migrations.CreateModel(
            name='Manual',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('language', models.CharField(default='en', max_length=8)),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='manuals', to='catalog.product')),
            ],
            options={
                'verbose_name': 'Manual',
                'verbose_name_plural': 'Manuals',
                'constraints': [models.UniqueConstraint(fields=('product', 'language'), name='manuals_product_language_unique')],
            },
        ),
    ]
