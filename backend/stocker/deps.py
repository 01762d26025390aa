from fastapi import Depends
from stocker.security import get_current_email
from stocker.services.product_source import get_product_source

# Common dependencies used across routers
CurrentEmail = Depends(get_current_email)
CatalogSource = Depends(get_product_source)
