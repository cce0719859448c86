"""Supabase Storage blob store."""

from dataclasses import dataclass

from supabase import Client

from foundation_mirror.services.sessions import BlobStore


@dataclass
class SupabaseBlobStore(BlobStore):
    """Stores images in a public Supabase Storage bucket."""

    client: Client
    bucket: str

    def upload(self, path: str, data: bytes, content_type: str) -> str:
        """Upload bytes once and return the object's public URL."""
        bucket = self.client.storage.from_(self.bucket)
        bucket.upload(
            path=path,
            file=data,
            file_options={"content-type": content_type, "upsert": "false"},
        )
        return bucket.get_public_url(path)
