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
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Sport',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *_timestamps(),
                ('slug', models.SlugField(max_length=255, unique=True, verbose_name='Slug')),
                ('image', models.CharField(blank=True, default='', max_length=500, verbose_name='Изображение')),
            ],
            options={
                'verbose_name': 'Вид спорта',
                'verbose_name_plural': 'Виды спорта',
                'ordering': ['id'],
            },
        ),
        migrations.CreateModel(
            name='SportTranslation',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *_translation_fields(),
                ('name', models.CharField(max_length=255, verbose_name='Название')),
                ('sport', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='translations', to='catalog.sport')),
            ],
            options={
                'verbose_name': 'Перевод вида спорта',
                'verbose_name_plural': 'Переводы видов спорта',
                'ordering': ['locale'],
                'unique_together': {('sport', 'locale')},
            },
        ),
        migrations.CreateModel(
            name='SpokenLanguage',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *_timestamps(),
            ],
            options={
                'verbose_name': 'Язык общения',
                'verbose_name_plural': 'Языки общения',
                'ordering': ['id'],
            },
        ),
        migrations.CreateModel(
            name='SpokenLanguageTranslation',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *_translation_fields(),
                ('name', models.CharField(max_length=255, verbose_name='Название')),
                ('spoken_language', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='translations', to='catalog.spokenlanguage')),
            ],
            options={
                'verbose_name': 'Перевод языка',
                'verbose_name_plural': 'Переводы языков',
                'ordering': ['locale'],
                'unique_together': {('spoken_language', 'locale')},
            },
        ),
        migrations.CreateModel(
            name='Gender',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *_timestamps(),
            ],
            options={
                'verbose_name': 'Пол',
                'verbose_name_plural': 'Пол',
                'ordering': ['id'],
            },
        ),
        migrations.CreateModel(
            name='GenderTranslation',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *_translation_fields(),
                ('name', models.CharField(max_length=255, verbose_name='Название')),
                ('gender', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='translations', to='catalog.gender')),
            ],
            options={
                'verbose_name': 'Перевод пола',
                'verbose_name_plural': 'Переводы пола',
                'ordering': ['locale'],
                'unique_together': {('gender', 'locale')},
            },
        ),
        migrations.CreateModel(
            name='Facility',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *_timestamps(),
            ],
            options={
                'verbose_name': 'Удобство',
                'verbose_name_plural': 'Удобства',
                'ordering': ['id'],
            },
        ),
        migrations.CreateModel(
            name='FacilityTranslation',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *_translation_fields(),
                ('name', models.CharField(max_length=255, verbose_name='Название')),
                ('facility', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='translations', to='catalog.facility')),
            ],
            options={
                'verbose_name': 'Перевод удобства',
                'verbose_name_plural': 'Переводы удобств',
                'ordering': ['locale'],
                'unique_together': {('facility', 'locale')},
            },
        ),
        migrations.CreateModel(
            name='Page',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *_timestamps(),
                ('order_by', models.IntegerField(default=0, verbose_name='Порядок')),
                ('image', models.CharField(blank=True, default='', max_length=500, verbose_name='Изображение')),
            ],
            options={
                'verbose_name': 'Страница',
                'verbose_name_plural': 'Страницы',
                'ordering': ['order_by', 'id'],
            },
        ),
        migrations.CreateModel(
            name='PageTranslation',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *_translation_fields(),
                ('title', models.CharField(max_length=255, verbose_name='Заголовок')),
                ('content', models.TextField(blank=True, default='', verbose_name='Содержимое')),
                ('page', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='translations', to='catalog.page')),
            ],
            options={
                'verbose_name': 'Перевод страницы',
                'verbose_name_plural': 'Переводы страниц',
                'ordering': ['locale'],
                'unique_together': {('page', 'locale')},
            },
        ),
    ]
