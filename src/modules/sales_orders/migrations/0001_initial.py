from decimal import Decimal

import django.db.models.deletion
import uuid6
from django.db import migrations, models

STATUS_CHOICES = [
    ("pending", "Pendente"),
    ("approved", "Aprovado"),
    ("in_production", "Em Produção"),
    ("finished", "Finalizado"),
    ("awaiting_dispatch", "Aguardando Despacho"),
    ("delivered", "Entregue"),
    ("canceled", "Cancelado"),
    ("rejected", "Recusado"),
]


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="SalesOrder",
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
                    "order_number",
                    models.CharField(editable=False, max_length=20, unique=True),
                ),
                ("customer_name", models.CharField(max_length=200)),
                (
                    "kind",
                    models.CharField(
                        choices=[
                            ("quote", "Orçamento"),
                            ("confirmed_order", "Pedido Confirmado"),
                        ],
                        default="quote",
                        max_length=20,
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=STATUS_CHOICES, default="pending", max_length=20
                    ),
                ),
                (
                    "total_amount",
                    models.DecimalField(
                        decimal_places=2, default=Decimal("0.00"), max_digits=12
                    ),
                ),
                ("notes", models.TextField(blank=True, default="")),
            ],
            options={
                "db_table": "sales_orders",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["status"], name="sales_orders_status_idx"),
                    models.Index(fields=["kind"], name="sales_orders_kind_idx"),
                    models.Index(
                        fields=["-created_at"], name="sales_orders_created_idx"
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="SalesOrderStatusHistory",
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
                    "sales_order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="status_history",
                        to="sales_orders.salesorder",
                    ),
                ),
            ],
            options={
                "db_table": "sales_order_status_history",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(
                        fields=["sales_order", "-created_at"],
                        name="sosh_order_created_idx",
                    ),
                ],
            },
        ),
    ]
