from .user import User
from .player import Player
from .inventory_item import InventoryItem

# Market
from .market_price import MarketPrice
from .merchant import Merchant
from .trade_record import TradeRecord
