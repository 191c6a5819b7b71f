"""Lambda handler for Files API using Mangum."""
from mangum import Mangum

from files_api.main import create_app
from files_api.settings import get_settings

# Settings are validated on cold start; a missing setting fails the init phase
app = create_app(get_settings())

lambda_handler = Mangum(app, lifespan="off")
