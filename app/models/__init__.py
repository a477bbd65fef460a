from .user import User, SalesRep
from .geography import Region, Area, Territory
from .distributor import Distributor
from .retailer import Retailer, retailer_assignments
