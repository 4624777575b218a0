from storages.backends.s3boto3 import S3Boto3Storage
from django.conf import settings
import mimetypes


class MyS3Boto3Storage(S3Boto3Storage):
    """Media storage for purchase receipts."""
    location = getattr(settings, 'AWS_MEDIA_LOCATION', 'media')
    file_overwrite = False

    def get_object_parameters(self, name):
        """
        Set Content-Disposition to inline for receipt PDFs and images so they
        display in the browser instead of downloading.
        """
        params = super().get_object_parameters(name)
        content_type, _ = mimetypes.guess_type(name)

        if content_type:
            params['ContentType'] = content_type
            if content_type in ['application/pdf', 'image/jpeg', 'image/png']:
                params['ContentDisposition'] = 'inline'

        return params
