from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='StorageEntry',
            fields=[
                ('key', models.CharField(help_text="Store key, e.g. 'rental-properties'", max_length=255, primary_key=True, serialize=False)),
                ('value', models.TextField(blank=True, default='', help_text='Serialized value')),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Storage Entry',
                'verbose_name_plural': 'Storage Entries',
                'db_table': 'storage_entries',
                'ordering': ['key'],
            },
        ),
    ]
