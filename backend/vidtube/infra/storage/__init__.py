from .s3_media_uploader import S3MediaUploader

__all__ = ["S3MediaUploader"]
