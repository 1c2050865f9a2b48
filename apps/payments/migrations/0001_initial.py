from django.db import migrations, models
import django.core.serializers.json
import django.db.models.deletion
from django.conf import settings


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('coupons', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='PaymentOrder',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('provider_order_id', models.CharField(help_text='Order id issued by the provider', max_length=100, unique=True)),
                ('receipt', models.CharField(db_index=True, help_text='Merchant receipt sent with the order', max_length=64)),
                ('payment_id', models.CharField(blank=True, default='', help_text='Provider payment id once paid', max_length=100)),
                ('amount', models.PositiveBigIntegerField(help_text='Amount in minor currency units (e.g. paise)')),
                ('currency', models.CharField(default='INR', max_length=3)),
                ('status', models.CharField(choices=[('created', 'Created'), ('paid', 'Paid'), ('failed', 'Failed'), ('cancelled', 'Cancelled'), ('expired', 'Expired')], default='created', max_length=20)),
                ('coupon_discount', models.DecimalField(decimal_places=2, default=0, max_digits=10)),
                ('pricing_snapshot', models.JSONField(blank=True, default=dict, encoder=django.core.serializers.json.DjangoJSONEncoder)),
                ('failure_reason', models.CharField(blank=True, default='', max_length=255)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('paid_at', models.DateTimeField(blank=True, null=True)),
                ('coupon', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='payment_orders', to='coupons.coupon')),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='payment_orders', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'payment_orders',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='PaymentVerificationLog',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('provider_order_id', models.CharField(help_text='Order id presented by the client', max_length=100)),
                ('payment_id', models.CharField(help_text='Payment id presented by the client', max_length=100)),
                ('verified', models.BooleanField(default=False)),
                ('reason', models.CharField(blank=True, default='', max_length=255)),
                ('request_ip', models.GenericIPAddressField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('payment_order', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='verification_logs', to='payments.paymentorder')),
            ],
            options={
                'db_table': 'payment_verification_logs',
                'ordering': ['-created_at'],
            },
        ),
        migrations.AddIndex(
            model_name='paymentorder',
            index=models.Index(fields=['status', 'created_at'], name='payment_order_status_idx'),
        ),
        migrations.AddIndex(
            model_name='paymentorder',
            index=models.Index(fields=['user'], name='payment_order_user_idx'),
        ),
        migrations.AddIndex(
            model_name='paymentverificationlog',
            index=models.Index(fields=['provider_order_id'], name='payment_verif_order_idx'),
        ),
        migrations.AddIndex(
            model_name='paymentverificationlog',
            index=models.Index(fields=['verified'], name='payment_verif_verified_idx'),
        ),
        migrations.AddIndex(
            model_name='paymentverificationlog',
            index=models.Index(fields=['created_at'], name='payment_verif_created_idx'),
        ),
    ]
