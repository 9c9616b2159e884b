import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):
    dependencies = [
        ("sales_orders", "0001_initial"),
    ]

    operations = [
        migrations.AddField(
            model_name="salesorder",
            name="source_quote",
            field=models.OneToOneField(
                blank=True,
                null=True,
                on_delete=django.db.models.deletion.PROTECT,
                related_name="converted_order",
                to="sales_orders.salesorder",
            ),
        ),
    ]
