from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='RateLimitWindow',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('identifier', models.CharField(help_text='Caller key, e.g. ip:1.2.3.4 or user:42', max_length=191)),
                ('endpoint', models.CharField(max_length=191)),
                ('window_start', models.DateTimeField(help_text='Start of the counting bucket')),
                ('request_count', models.PositiveIntegerField(default=0)),
            ],
            options={
                'db_table': 'rate_limit_windows',
            },
        ),
        migrations.AddIndex(
            model_name='ratelimitwindow',
            index=models.Index(fields=['window_start'], name='rate_limit_window_start_idx'),
        ),
        migrations.AddConstraint(
            model_name='ratelimitwindow',
            constraint=models.UniqueConstraint(fields=('identifier', 'endpoint', 'window_start'), name='unique_rate_limit_bucket'),
        ),
    ]
