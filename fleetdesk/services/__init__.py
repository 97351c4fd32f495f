"""Domain services: authentication, authorization and resource CRUD."""
