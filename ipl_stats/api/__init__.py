"""HTTP routers for the gateway; mounted under the API prefix by ``main``."""
