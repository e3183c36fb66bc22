import os
import random
import time

import boto3


def get_client(region):
    return boto3.client(
        "s3",
        region_name=region,
        aws_access_key_id=os.environ.get("AWS_ACCESS_KEY_ID"),
        aws_secret_access_key=os.environ.get("AWS_SECRET_ACCESS_KEY")
    )


def extract_s3_key(url: str):
    if ".amazonaws.com/" not in url:
        raise ValueError("Invalid S3 URL format")
    after = url.split(".amazonaws.com/", 1)[1]
    key = after.split("?", 1)[0]
    if not key:
        raise ValueError("Invalid S3 URL format")
    return key


def make_key(prefix: str, ext: str):
    ts = str(int(time.time() * 1000))
    rand = ''.join(random.choices("abcdefghijklmnopqrstuvwxyz0123456789", k=4))
    return f"{prefix.strip('/')}/{ts}_{rand}.{ext}"


def upload_bytes(client, bucket, key, data: bytes, content_type: str):
    client.put_object(
        Bucket=bucket,
        Key=key,
        Body=data,
        ContentType=content_type
    )
    return key


def create_presigned(client, bucket, key, expires=3600):
    return client.generate_presigned_url(
        ClientMethod="get_object",
        Params={"Bucket": bucket, "Key": key},
        ExpiresIn=expires
    )


def object_url(bucket, region, key):
    return f"https://{bucket}.s3.{region}.amazonaws.com/{key}"
