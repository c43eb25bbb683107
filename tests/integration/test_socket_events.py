"""
Integration tests for the Socket.IO protocol, end to end through the app.
"""
import pytest


ADMIN_PASSWORD = 'test-secret'


def states(received):
    return [r['args'][0] for r in received if r['name'] == 'state']


def named(received, name):
    return [r['args'][0] for r in received if r['name'] == name]


class TestConnection:
    
    def test_state_on_connect(self, socket_client):
        received = socket_client.get_received()
        assert [r['name'] for r in received] == ['state']
        
        state = received[0]['args'][0]
        assert len(state['groups']) == 8
        assert len(state['slots']) == 32
        assert len(state['matches']) == 496
        assert state['people'] == []
        assert state['scoreboard'] == []
    
    def test_disconnect_forgets_session(self, app, socket_client):
        assert len(app.hub.sessions) == 1
        socket_client.disconnect()
        assert len(app.hub.sessions) == 0


class TestLogin:
    
    def test_bad_password(self, socket_client):
        socket_client.get_received()
        socket_client.emit('loginAdmin', 'nope')
        assert named(socket_client.get_received(), 'adminStatus') == [{'ok': False}]
    
    def test_good_password(self, socket_client):
        socket_client.get_received()
        socket_client.emit('loginAdmin', ADMIN_PASSWORD)
        assert named(socket_client.get_received(), 'adminStatus') == [{'ok': True}]


class TestPrivilege:
    
    def test_viewer_cannot_mutate(self, app, socket_client, admin_socket):
        socket_client.get_received()
        socket_client.emit('addTestPeople')
        socket_client.emit('updateGroupName', {'groupId': 'G1', 'name': 'Hackers'})
        
        assert socket_client.get_received() == []
        assert admin_socket.get_received() == []
        assert app.store.people == []
        assert app.store.groups[0].name == 'Group 1'
    
    def test_admin_mutation_reaches_everyone(self, socket_client, admin_socket):
        socket_client.get_received()
        admin_socket.emit('addPerson', {'name': 'Ann'})
        
        viewer_states = states(socket_client.get_received())
        admin_states = states(admin_socket.get_received())
        assert len(viewer_states) == 1
        assert viewer_states == admin_states
        assert viewer_states[0]['people'] == [
            {'id': 1, 'name': 'Ann', 'isRef': False, 'isCaptain': False, 'isSelected': False}
        ]


class TestTournamentFlow:
    
    def test_randomize_without_players(self, socket_client, admin_socket):
        socket_client.get_received()
        admin_socket.emit('randomizeGroups')
        
        received = admin_socket.get_received()
        assert [r['name'] for r in received] == ['errorMsg']
        assert 'Need at least 32' in received[0]['args'][0]['msg']
        assert socket_client.get_received() == []
    
    def test_full_round_trip(self, app, socket_client, admin_socket):
        socket_client.get_received()
        admin_socket.emit('addTestPeople')
        admin_socket.emit('randomizeGroups')
        
        state = states(socket_client.get_received())[-1]
        assert len(state['people']) == 40
        seated = [s['personId'] for s in state['slots'] if s['personId'] is not None]
        assert len(seated) == 32 == len(set(seated))
        
        # Any viewer may record a result
        socket_client.emit('setMatchWinner', {'matchId': 1, 'winner': 'p1'})
        state = states(socket_client.get_received())[-1]
        winner_id = next(s['personId'] for s in state['slots']
                         if s['groupId'] == 'G1' and s['letter'] == 'A')
        assert state['matches'][0]['win1'] is True
        assert state['scoreboard'][0]['personId'] == winner_id
        assert state['scoreboard'][0]['wins'] == 1
        admin_socket.get_received()
        
        admin_socket.emit('resetTournament')
        state = states(admin_socket.get_received())[-1]
        assert not any(m['win1'] or m['win2'] for m in state['matches'])
        assert all(s['personId'] is None for s in state['slots'])
        assert not any(p['isCaptain'] for p in state['people'])
        assert sum(p['isRef'] for p in state['people']) == 10
    
    def test_clear_people(self, admin_socket):
        admin_socket.emit('addTestPeople')
        admin_socket.emit('clearPeople')
        state = states(admin_socket.get_received())[-1]
        assert state['people'] == []
    
    def test_flags_and_selection(self, admin_socket):
        admin_socket.emit('addPerson', {'name': 'Ann'})
        admin_socket.emit('updatePersonFlags', {'personId': '1', 'isRef': False, 'isCaptain': True})
        admin_socket.emit('setPersonSelected', {'personId': 1, 'isSelected': True})
        
        person = states(admin_socket.get_received())[-1]['people'][0]
        assert person['isCaptain'] is False
        assert person['isSelected'] is True
    
    def test_invalid_payload_is_silent(self, admin_socket):
        admin_socket.emit('deletePerson', {'personId': 'abc'})
        admin_socket.emit('setMatchWinner', {'matchId': 1, 'winner': 'both'})
        assert admin_socket.get_received() == []
