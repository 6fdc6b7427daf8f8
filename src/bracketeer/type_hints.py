"""Type hints used in Bracketeer."""

from typing import List, Sequence, Tuple

# Opaque, stable participant identifier
ParticipantId = str

# Raw result vector of a match: (wins, wins, draws) or one placement per seat
ResultVector = List[int]

# Unordered pair of participant ids who have met
MeetingKey = frozenset

# Pairing group chain, one list of participants per group
GroupChain = List[List["Participant"]]

# Ordered participants handed to the pairing engine
Participants = Sequence["Participant"]

# (minimum, maximum) participants per match
GroupBounds = Tuple[int, int]

#  LocalWords:  ParticipantId ResultVector
