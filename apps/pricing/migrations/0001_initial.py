from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='DynamicPricingRule',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True, default='')),
                ('rule_type', models.CharField(choices=[('cart_value', 'Cart Value'), ('quantity', 'Quantity'), ('category', 'Category'), ('product', 'Product'), ('time_based', 'Time Based')], default='cart_value', max_length=20)),
                ('conditions', models.JSONField(blank=True, default=dict, help_text='Condition expression, {} always matches')),
                ('discount_type', models.CharField(choices=[('percentage', 'Percentage'), ('fixed', 'Fixed Amount')], max_length=20)),
                ('discount_value', models.DecimalField(decimal_places=2, max_digits=10)),
                ('applies_to', models.CharField(choices=[('all', 'All Items'), ('category', 'Categories'), ('product', 'Products')], default='all', max_length=20)),
                ('applies_to_ids', models.JSONField(blank=True, default=list, help_text='Product or category ids in scope')),
                ('priority', models.IntegerField(default=0, help_text='Higher priority wins')),
                ('is_active', models.BooleanField(default=True)),
                ('starts_at', models.DateTimeField(blank=True, null=True)),
                ('ends_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'dynamic_pricing_rules',
                'ordering': ['-priority', 'id'],
            },
        ),
        migrations.CreateModel(
            name='FlashSale',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True, default='')),
                ('discount_percentage', models.DecimalField(decimal_places=2, max_digits=5)),
                ('starts_at', models.DateTimeField()),
                ('ends_at', models.DateTimeField()),
                ('product_ids', models.JSONField(blank=True, default=list)),
                ('category_ids', models.JSONField(blank=True, default=list)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'db_table': 'flash_sales',
                'ordering': ['-starts_at'],
            },
        ),
        migrations.AddIndex(
            model_name='dynamicpricingrule',
            index=models.Index(fields=['is_active', 'priority'], name='pricing_rule_active_prio_idx'),
        ),
        migrations.AddIndex(
            model_name='dynamicpricingrule',
            index=models.Index(fields=['starts_at', 'ends_at'], name='pricing_rule_window_idx'),
        ),
        migrations.AddIndex(
            model_name='flashsale',
            index=models.Index(fields=['is_active', 'starts_at', 'ends_at'], name='flash_sale_active_window_idx'),
        ),
    ]
