"""
Unit tests for SlotGrid.
"""
import pytest
from hub.models import GROUP_IDS, ROLES
from hub.slots import SlotGrid


class TestSlotGrid:
    
    def test_size_is_groups_times_roles(self):
        grid = SlotGrid()
        assert len(grid) == len(GROUP_IDS) * len(ROLES) == 32
    
    def test_iteration_order_group_major(self):
        """Slots iterate group by group, roles in order."""
        grid = SlotGrid()
        keys = [(s.group_id, s.role) for s in grid]
        assert keys[:5] == [('G1', 'A'), ('G1', 'B'), ('G1', 'C'), ('G1', 'D'), ('G2', 'A')]
        assert keys[-1] == ('G8', 'D')
    
    def test_slot_for_returns_same_object(self):
        """Lookups hit the stored slot, so occupant changes are visible."""
        grid = SlotGrid()
        grid.slot_for('G3', 'C').person_id = 7
        assert grid.occupant_of('G3', 'C') == 7
    
    def test_slot_for_unknown_key_is_a_bug(self):
        """Unknown group/role combinations raise KeyError."""
        grid = SlotGrid()
        with pytest.raises(KeyError):
            grid.slot_for('G9', 'A')
        with pytest.raises(KeyError):
            grid.slot_for('G1', 'E')
    
    def test_role_filters(self):
        grid = SlotGrid()
        captains = grid.with_role('A')
        others = grid.without_role('A')
        assert [s.group_id for s in captains] == list(GROUP_IDS)
        assert len(others) == 24
        assert all(s.role != 'A' for s in others)
    
    def test_clear_person(self):
        """Only the given person's slots are emptied."""
        grid = SlotGrid()
        grid.slot_for('G1', 'A').person_id = 1
        grid.slot_for('G2', 'B').person_id = 1
        grid.slot_for('G2', 'C').person_id = 2
        
        assert grid.clear_person(1) == 2
        assert grid.occupant_of('G1', 'A') is None
        assert grid.occupant_of('G2', 'B') is None
        assert grid.occupant_of('G2', 'C') == 2
    
    def test_clear(self):
        grid = SlotGrid()
        for i, slot in enumerate(grid):
            slot.person_id = i
        grid.clear()
        assert all(s.is_empty for s in grid)
    
    def test_to_list_wire_format(self):
        grid = SlotGrid()
        grid.slot_for('G1', 'A').person_id = 5
        assert grid.to_list()[0] == {'groupId': 'G1', 'letter': 'A', 'personId': 5}
