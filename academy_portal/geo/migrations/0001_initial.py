import django.db.models.deletion
from django.db import migrations, models


def _timestamps():
    return [
        ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Создано')),
        ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Обновлено')),
    ]


def _translation_fields():
    return _timestamps() + [
        ('locale', models.CharField(default='en', max_length=10, verbose_name='Локаль')),
        ('name', models.CharField(max_length=255, verbose_name='Название')),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Country',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *_timestamps(),
            ],
            options={
                'verbose_name': 'Страна',
                'verbose_name_plural': 'Страны',
                'ordering': ['id'],
            },
        ),
        migrations.CreateModel(
            name='CountryTranslation',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *_translation_fields(),
                ('country', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='translations', to='geo.country')),
            ],
            options={
                'verbose_name': 'Перевод страны',
                'verbose_name_plural': 'Переводы стран',
                'ordering': ['locale'],
                'unique_together': {('country', 'locale')},
            },
        ),
        migrations.CreateModel(
            name='State',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *_timestamps(),
                ('country', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='states', to='geo.country', verbose_name='Страна')),
            ],
            options={
                'verbose_name': 'Регион',
                'verbose_name_plural': 'Регионы',
                'ordering': ['id'],
            },
        ),
        migrations.CreateModel(
            name='StateTranslation',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *_translation_fields(),
                ('state', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='translations', to='geo.state')),
            ],
            options={
                'verbose_name': 'Перевод региона',
                'verbose_name_plural': 'Переводы регионов',
                'ordering': ['locale'],
                'unique_together': {('state', 'locale')},
            },
        ),
        migrations.CreateModel(
            name='City',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *_timestamps(),
                ('state', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='cities', to='geo.state', verbose_name='Регион')),
            ],
            options={
                'verbose_name': 'Город',
                'verbose_name_plural': 'Города',
                'ordering': ['id'],
            },
        ),
        migrations.CreateModel(
            name='CityTranslation',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *_translation_fields(),
                ('city', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='translations', to='geo.city')),
            ],
            options={
                'verbose_name': 'Перевод города',
                'verbose_name_plural': 'Переводы городов',
                'ordering': ['locale'],
                'unique_together': {('city', 'locale')},
            },
        ),
    ]
