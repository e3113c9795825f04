from decimal import Decimal

import apps.catalog.models.attachment
import django.core.validators
import django.db.models.deletion
import simple_history.models
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='ProductCategory',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200, verbose_name='Nome')),
                ('slug', models.SlugField(max_length=200, unique=True, verbose_name='Slug')),
                ('description', models.TextField(blank=True, verbose_name='Descrição')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Categoria',
                'verbose_name_plural': 'Categorias',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='TaxRate',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100, verbose_name='Nome')),
                ('rate', models.DecimalField(decimal_places=2, max_digits=6, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))], verbose_name='Alíquota (%)')),
            ],
            options={
                'verbose_name': 'Alíquota',
                'verbose_name_plural': 'Alíquotas',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Product',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255, verbose_name='Nome')),
                ('permalink', models.SlugField(max_length=255, unique=True, verbose_name='Permalink')),
                ('sku', models.CharField(max_length=100, verbose_name='SKU')),
                ('description', models.TextField(blank=True, verbose_name='Descrição')),
                ('short_description', models.TextField(blank=True, verbose_name='Descrição curta')),
                ('in_the_box', models.TextField(blank=True, verbose_name='Conteúdo da embalagem')),
                ('weight', models.DecimalField(decimal_places=3, default=Decimal('0.000'), max_digits=10, verbose_name='Peso (kg)')),
                ('price', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10, verbose_name='Preço')),
                ('cost_price', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True, verbose_name='Preço de custo')),
                ('active', models.BooleanField(default=True, verbose_name='Ativo')),
                ('featured', models.BooleanField(default=False, verbose_name='Destaque')),
                ('default', models.BooleanField(default=False, verbose_name='Variante padrão')),
                ('stock_control', models.BooleanField(default=True, verbose_name='Controlar estoque')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Criado em')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Atualizado em')),
                ('parent', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='variants', to='catalog.product', verbose_name='Produto pai')),
                ('tax_rate', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='products', to='catalog.taxrate', verbose_name='Alíquota')),
            ],
            options={
                'verbose_name': 'Produto',
                'verbose_name_plural': 'Produtos',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='ProductCategorization',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='product_categorizations', to='catalog.product', verbose_name='Produto')),
                ('product_category', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='product_categorizations', to='catalog.productcategory', verbose_name='Categoria')),
            ],
            options={
                'verbose_name': 'Categorização',
                'verbose_name_plural': 'Categorizações',
                'unique_together': {('product', 'product_category')},
            },
        ),
        migrations.AddField(
            model_name='product',
            name='product_categories',
            field=models.ManyToManyField(blank=True, related_name='products', through='catalog.ProductCategorization', to='catalog.productcategory', verbose_name='Categorias'),
        ),
        migrations.CreateModel(
            name='StockLevelAdjustment',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('adjustment', models.IntegerField(verbose_name='Ajuste')),
                ('description', models.CharField(blank=True, max_length=255, verbose_name='Descrição')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Criado em')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='stock_level_adjustments', to='catalog.product', verbose_name='Produto')),
            ],
            options={
                'verbose_name': 'Ajuste de Estoque',
                'verbose_name_plural': 'Ajustes de Estoque',
                'ordering': ['-created_at', '-pk'],
            },
        ),
        migrations.CreateModel(
            name='Attachment',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('file', models.FileField(upload_to=apps.catalog.models.attachment.attachment_upload_path, verbose_name='Arquivo')),
                ('role', models.CharField(choices=[('default_image', 'Imagem principal'), ('data_sheet', 'Ficha técnica'), ('extra', 'Extra')], default='extra', max_length=20, verbose_name='Papel')),
                ('file_name', models.CharField(blank=True, max_length=255, verbose_name='Nome do arquivo')),
                ('file_type', models.CharField(blank=True, max_length=100, verbose_name='Tipo')),
                ('file_size', models.PositiveIntegerField(default=0, verbose_name='Tamanho (bytes)')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Criado em')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='attachments', to='catalog.product', verbose_name='Produto')),
            ],
            options={
                'verbose_name': 'Anexo',
                'verbose_name_plural': 'Anexos',
                'ordering': ['role', 'pk'],
            },
        ),
        migrations.CreateModel(
            name='HistoricalProduct',
            fields=[
                ('id', models.BigIntegerField(auto_created=True, blank=True, db_index=True, verbose_name='ID')),
                ('name', models.CharField(max_length=255, verbose_name='Nome')),
                ('permalink', models.SlugField(max_length=255, verbose_name='Permalink')),
                ('sku', models.CharField(max_length=100, verbose_name='SKU')),
                ('description', models.TextField(blank=True, verbose_name='Descrição')),
                ('short_description', models.TextField(blank=True, verbose_name='Descrição curta')),
                ('in_the_box', models.TextField(blank=True, verbose_name='Conteúdo da embalagem')),
                ('weight', models.DecimalField(decimal_places=3, default=Decimal('0.000'), max_digits=10, verbose_name='Peso (kg)')),
                ('price', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10, verbose_name='Preço')),
                ('cost_price', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True, verbose_name='Preço de custo')),
                ('active', models.BooleanField(default=True, verbose_name='Ativo')),
                ('featured', models.BooleanField(default=False, verbose_name='Destaque')),
                ('default', models.BooleanField(default=False, verbose_name='Variante padrão')),
                ('stock_control', models.BooleanField(default=True, verbose_name='Controlar estoque')),
                ('created_at', models.DateTimeField(blank=True, editable=False, verbose_name='Criado em')),
                ('updated_at', models.DateTimeField(blank=True, editable=False, verbose_name='Atualizado em')),
                ('history_id', models.AutoField(primary_key=True, serialize=False)),
                ('history_date', models.DateTimeField(db_index=True)),
                ('history_change_reason', models.CharField(max_length=100, null=True)),
                ('history_type', models.CharField(choices=[('+', 'Created'), ('~', 'Changed'), ('-', 'Deleted')], max_length=1)),
                ('history_user', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
                ('parent', models.ForeignKey(blank=True, db_constraint=False, null=True, on_delete=django.db.models.deletion.DO_NOTHING, related_name='+', to='catalog.product', verbose_name='Produto pai')),
                ('tax_rate', models.ForeignKey(blank=True, db_constraint=False, null=True, on_delete=django.db.models.deletion.DO_NOTHING, related_name='+', to='catalog.taxrate', verbose_name='Alíquota')),
            ],
            options={
                'verbose_name': 'historical Produto',
                'verbose_name_plural': 'historical Produtos',
                'ordering': ('-history_date', '-history_id'),
                'get_latest_by': ('history_date', 'history_id'),
            },
            bases=(simple_history.models.HistoricalChanges, models.Model),
        ),
    ]
