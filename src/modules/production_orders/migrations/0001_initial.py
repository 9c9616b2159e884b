from decimal import Decimal

import django.db.models.deletion
import uuid6
from django.db import migrations, models

STATUS_CHOICES = [
    ("awaiting", "Aguardando"),
    ("in_production", "Em Produção"),
    ("partial", "Parcial"),
    ("completed", "Concluído"),
    ("canceled", "Cancelado"),
]


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("sales_orders", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="ProductionOrder",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid6.uuid7,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "deleted_at",
                    models.DateTimeField(
                        blank=True, db_index=True, default=None, null=True
                    ),
                ),
                (
                    "op_number",
                    models.CharField(editable=False, max_length=20, unique=True),
                ),
                ("product_name", models.CharField(max_length=200)),
                (
                    "quantity_meters",
                    models.DecimalField(
                        decimal_places=2, default=Decimal("0.00"), max_digits=12
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=STATUS_CHOICES, default="awaiting", max_length=20
                    ),
                ),
                ("scheduled_date", models.DateField(blank=True, null=True)),
                ("started_at", models.DateTimeField(blank=True, null=True)),
                ("finished_at", models.DateTimeField(blank=True, null=True)),
                ("technical_instructions", models.TextField(blank=True, default="")),
                ("notes", models.TextField(blank=True, default="")),
                (
                    "sales_order",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="production_orders",
                        to="sales_orders.salesorder",
                    ),
                ),
            ],
            options={
                "db_table": "production_orders",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(
                        fields=["status"], name="production_orders_status_idx"
                    ),
                    models.Index(
                        fields=["-created_at"], name="production_orders_created_idx"
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="ProductionOrderStatusHistory",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid6.uuid7,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "old_status",
                    models.CharField(
                        blank=True, choices=STATUS_CHOICES, max_length=20, null=True
                    ),
                ),
                (
                    "new_status",
                    models.CharField(choices=STATUS_CHOICES, max_length=20),
                ),
                ("notes", models.TextField(blank=True, default="")),
                (
                    "production_order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="status_history",
                        to="production_orders.productionorder",
                    ),
                ),
            ],
            options={
                "db_table": "production_order_status_history",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(
                        fields=["production_order", "-created_at"],
                        name="posh_order_created_idx",
                    ),
                ],
            },
        ),
    ]
