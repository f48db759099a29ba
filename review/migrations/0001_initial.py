from django.db import migrations, models
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Word',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('text', models.CharField(max_length=128)),
                ('meaning', models.CharField(max_length=255)),
                ('phonetic', models.CharField(blank=True, default='', max_length=128)),
                ('status', models.CharField(choices=[('new', '未学习'), ('learning', '学习中'), ('reviewing', '复习中'), ('mastered', '已掌握')], default='new', max_length=16)),
                ('interval_days', models.PositiveIntegerField(default=0)),
                ('ease_factor', models.FloatField(default=2.5)),
                ('due_at', models.DateTimeField(blank=True, null=True)),
                ('last_reviewed_at', models.DateTimeField(blank=True, null=True)),
                ('consecutive_correct', models.PositiveIntegerField(default=0)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                'ordering': ['id'],
                'indexes': [models.Index(fields=['status', 'due_at'], name='review_word_status_due_idx')],
            },
        ),
    ]
