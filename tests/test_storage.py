"""
Payment proof storage tests.
"""
from django.core.files.uploadedfile import SimpleUploadedFile

from shared.storage import S3Storage


class FakeS3Client:

    def __init__(self):
        self.uploads = []

    def upload_fileobj(self, file_obj, bucket, key, ExtraArgs=None):
        self.uploads.append((bucket, key, ExtraArgs))


def test_payment_proof_key_layout():
    storage = S3Storage(bucket_name='proofs')
    storage._client = FakeS3Client()
    upload = SimpleUploadedFile('Receipt.PNG', b'\x89PNG', content_type='image/png')

    key = storage.upload_payment_proof(upload, user_id=42)

    assert key.startswith('payment-proofs/42/')
    assert key.endswith('.png')
    assert storage.client.uploads == [('proofs', key, {'ContentType': 'image/png'})]
