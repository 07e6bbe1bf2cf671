from .get_resourcegroup import get_resourcegroup
