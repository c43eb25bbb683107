"""
Tournament Hub - live coordination server for the group tournament

Responsibilities:
- Fixed 8-group, 8-round match schedule
- Group/role slot grid and randomized roster assignment
- Live scoreboard derived from match results
- Full-state synchronization of every connected viewer over Socket.IO
"""
