from .buyer import BuyerAggregate, BuyerMarkup, ExecutionContext

__all__ = ["BuyerAggregate", "BuyerMarkup", "ExecutionContext"]
