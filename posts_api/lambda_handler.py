# posts_api/lambda_handler.py
# AWS Lambda entry points. Each one wraps a FastAPI app with Mangum.
#   posts_handler -> /posts       (GET, POST)
#   post_handler  -> /posts/{id}  (GET, DELETE)
#   handler       -> both resources from one function

from mangum import Mangum

from .app import app, post_app, posts_app

handler = Mangum(app, lifespan="off")
posts_handler = Mangum(posts_app, lifespan="off")
post_handler = Mangum(post_app, lifespan="off")
