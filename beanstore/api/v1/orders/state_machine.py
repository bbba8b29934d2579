"""
Order state machine for managing order status transitions
"""

from typing import Dict, List, Set
from beanstore.models.order import OrderStatus

class OrderStateMachine:
    """
    Manages valid order status transitions

    Completed and cancelled orders are final. Moving an order to the status
    it already has is not a transition.
    """

    def __init__(self):
        # Define valid transitions
        self.transitions: Dict[OrderStatus, Set[OrderStatus]] = {
            OrderStatus.PENDING: {
                OrderStatus.PROCESSING,
                OrderStatus.SHIPPED,
                OrderStatus.COMPLETED,
                OrderStatus.CANCELLED
            },
            OrderStatus.PROCESSING: {
                OrderStatus.SHIPPED,
                OrderStatus.COMPLETED,
                OrderStatus.CANCELLED
            },
            OrderStatus.SHIPPED: {
                OrderStatus.COMPLETED,
                OrderStatus.CANCELLED
            },
            OrderStatus.COMPLETED: set(),  # Terminal state
            OrderStatus.CANCELLED: set()   # Terminal state
        }

    def can_transition(
        self,
        current_status: OrderStatus,
        new_status: OrderStatus
    ) -> bool:
        """
        Check if transition is valid

        Args:
            current_status: Current order status
            new_status: Desired new status

        Returns:
            True if transition is allowed
        """
        valid_transitions = self.transitions.get(OrderStatus(current_status), set())
        return OrderStatus(new_status) in valid_transitions

    def get_valid_transitions(
        self,
        current_status: OrderStatus
    ) -> List[OrderStatus]:
        """Valid next statuses, in lifecycle order"""
        valid = self.transitions.get(OrderStatus(current_status), set())
        return [status for status in OrderStatus if status in valid]

    def is_terminal_state(self, status: OrderStatus) -> bool:
        return len(self.transitions.get(OrderStatus(status), set())) == 0

    def is_cancellable(self, status: OrderStatus) -> bool:
        return OrderStatus.CANCELLED in self.transitions.get(OrderStatus(status), set())
