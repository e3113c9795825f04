import mimetypes
import os

from django.db import models


def attachment_upload_path(instance, filename):
    return f"attachment/{instance.product_id}/{os.path.basename(filename)}"


class AttachmentQuerySet(models.QuerySet):

    def for_role(self, role):
        """First attachment with the given role, or None."""
        return self.filter(role=role).order_by('pk').first()


class Attachment(models.Model):
    """Files attached to a product (images, data sheets, extra documents)."""
    ROLE_CHOICES = [
        ('default_image', 'Imagem principal'),
        ('data_sheet', 'Ficha técnica'),
        ('extra', 'Extra'),
    ]

    product = models.ForeignKey(
        'catalog.Product',
        on_delete=models.CASCADE,
        related_name='attachments',
        verbose_name='Produto'
    )
    file = models.FileField(
        upload_to=attachment_upload_path,
        verbose_name='Arquivo'
    )
    role = models.CharField(
        max_length=20,
        choices=ROLE_CHOICES,
        default='extra',
        verbose_name='Papel'
    )
    file_name = models.CharField(
        max_length=255,
        blank=True,
        verbose_name='Nome do arquivo'
    )
    file_type = models.CharField(
        max_length=100,
        blank=True,
        verbose_name='Tipo'
    )
    file_size = models.PositiveIntegerField(
        default=0,
        verbose_name='Tamanho (bytes)'
    )
    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name='Criado em'
    )

    objects = AttachmentQuerySet.as_manager()

    class Meta:
        ordering = ['role', 'pk']
        verbose_name = 'Anexo'
        verbose_name_plural = 'Anexos'

    def __str__(self):
        return f"{self.product.sku} - {self.get_role_display()}: {self.file_name}"

    def save(self, *args, **kwargs):
        if self.file:
            if not self.file_name:
                self.file_name = os.path.basename(self.file.name)
            if not self.file_type:
                self.file_type = (
                    getattr(self.file.file, 'content_type', None)
                    or mimetypes.guess_type(self.file_name)[0]
                    or 'application/octet-stream'
                )
            if not self.file_size:
                self.file_size = self.file.size
        super().save(*args, **kwargs)

    @property
    def is_image(self):
        return self.file_type.startswith('image/')
