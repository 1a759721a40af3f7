"""S3 Object Lambda function that answers GetObject requests with a PNG thumbnail."""
