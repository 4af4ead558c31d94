from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('gigs', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Order',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('accepted', 'Accepted'), ('rejected', 'Rejected'), ('paid', 'Paid'), ('in_progress', 'In Progress'), ('completed', 'Completed')], default='pending', max_length=20, verbose_name='Status')),
                ('paid', models.BooleanField(default=False, verbose_name='Paid')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Created At')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Updated At')),
                ('buyer', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='purchases', to=settings.AUTH_USER_MODEL, verbose_name='Buyer')),
                ('gig', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='orders', to='gigs.gig', verbose_name='Gig')),
                ('seller', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='sales', to=settings.AUTH_USER_MODEL, verbose_name='Seller')),
            ],
            options={
                'verbose_name': 'Order',
                'verbose_name_plural': 'Orders',
                'ordering': ['created_at', 'id'],
                'indexes': [
                    models.Index(fields=['buyer', 'created_at'], name='order_buyer_idx'),
                    models.Index(fields=['seller', 'created_at'], name='order_seller_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(fields=('gig', 'buyer', 'seller'), name='unique_order_per_gig_buyer_seller'),
                    models.CheckConstraint(condition=models.Q(('buyer', models.F('seller')), _negated=True), name='order_buyer_is_not_seller'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Message',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('message', models.TextField(verbose_name='Message')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Created At')),
                ('order', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='conversation', to='orders.order', verbose_name='Order')),
                ('sender', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='order_messages', to=settings.AUTH_USER_MODEL, verbose_name='Sender')),
            ],
            options={
                'verbose_name': 'Message',
                'verbose_name_plural': 'Messages',
                'ordering': ['id'],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('message', ''), _negated=True), name='message_not_empty'),
                ],
            },
        ),
    ]
