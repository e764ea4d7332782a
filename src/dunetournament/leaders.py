"""Leader catalog and per-leader performance statistics."""

# Dune Tournament
# Copyright (C) 2025  Dune Tournament developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from dataclasses import dataclass
from typing import Dict, Iterable, List, Literal, Optional

from dunetournament.models.tournament import Round

LeaderTier = Literal["A", "B", "C", "none"]
Expansion = Literal["base", "ix", "uprising", "bloodlines"]


@dataclass(frozen=True)
class LeaderInfo:
    id: str
    name: str
    tier: LeaderTier
    expansion: Expansion


LEADER_LIST: List[LeaderInfo] = [
    # Base game
    LeaderInfo("paulAtreides", "Paul Atreides", "none", "base"),
    LeaderInfo("letoAtreides", "Duke Leto Atreides", "B", "base"),
    LeaderInfo("memnonThorvald", "Earl Memnon Thorvald", "none", "base"),
    LeaderInfo("glossuRabban", 'Glossu "The Beast" Rabban', "A", "base"),
    LeaderInfo("vladimirHarkonnen", "Baron Vladimir Harkonnen", "B", "base"),
    LeaderInfo("helenaRichese", "Helena Richese", "none", "base"),
    LeaderInfo("arianaThorvald", "Countess Ariana Thorvald", "none", "base"),
    LeaderInfo("ilbanRichese", "Count Ilban Richese", "none", "base"),
    LeaderInfo("armandEcaz", "Archduke Armand Ecaz", "B", "base"),
    # Rise of Ix
    LeaderInfo("tessiaVernius", "Tessia Vernius", "A", "ix"),
    LeaderInfo("ilesaEcaz_com", "Ilesa Ecaz (Community)", "A", "ix"),
    # Uprising
    LeaderInfo("stabanTuek", "Staban Tuek", "A", "uprising"),
    LeaderInfo("amberMetulli", "Lady Amber Metulli", "B", "uprising"),
    LeaderInfo("gurneyHalleck", "Gurney Halleck", "B", "uprising"),
    LeaderInfo("margotFenring", "Lady Margot Fenring", "C", "uprising"),
    LeaderInfo("irulanCorrino", "Princess Irulan", "B", "uprising"),
    LeaderInfo("jessica", "Lady Jessica", "C", "uprising"),
    LeaderInfo("feydRauthaHarkonnen", "Feyd-Rautha Harkonnen", "C", "uprising"),
    LeaderInfo("shaddamCorrino", "Shaddam IV", "C", "uprising"),
    LeaderInfo("muadDib", "Muad'Dib", "C", "uprising"),
    LeaderInfo("yunaMoritani", "Princess Yuna Moritani", "B", "uprising"),
    # Bloodlines
    LeaderInfo("bl_Chani", "Chani", "C", "bloodlines"),
    LeaderInfo("bl_Duncan", "Duncan Idaho", "C", "bloodlines"),
    LeaderInfo("bl_Esmar", "Esmar Tuek", "A", "bloodlines"),
    LeaderInfo("bl_Hasimir", "Count Hasimir Fenring", "A", "bloodlines"),
    LeaderInfo("bl_Kota", "Kota Odax of Ix", "A", "bloodlines"),
    LeaderInfo("bl_Liet", "Liet Kynes", "none", "bloodlines"),
    LeaderInfo("liet_com", "Liet Kynes (Community)", "A", "bloodlines"),
    LeaderInfo("bl_Mohiam", "Gaius Helen Mohiam", "C", "bloodlines"),
    LeaderInfo("bl_Piter", "Piter De Vries", "none", "bloodlines"),
    LeaderInfo("bl_Piter_com", "Piter De Vries (Community)", "A", "bloodlines"),
    LeaderInfo("bl_Yrkoon", "Steersman Y'rkoon", "C", "bloodlines"),
]

LEADERS: List[str] = [leader.name for leader in LEADER_LIST]

_LEADERS_BY_NAME: Dict[str, LeaderInfo] = {leader.name: leader for leader in LEADER_LIST}


def get_leader_info(name: str) -> Optional[LeaderInfo]:
    """Look up a leader by display name."""
    return _LEADERS_BY_NAME.get(name)


def leaders_by_tier(tier: LeaderTier) -> List[LeaderInfo]:
    return [leader for leader in LEADER_LIST if leader.tier == tier]


@dataclass(frozen=True)
class LeaderStat:
    leader: str
    tier: LeaderTier
    plays: int
    wins: int
    top2: int
    total_vp: int
    avg_position: float
    win_rate: float

    @property
    def avg_vp(self) -> float:
        return self.total_vp / self.plays if self.plays else 0.0

    def to_dict(self) -> Dict[str, object]:
        return {
            "leader": self.leader,
            "tier": self.tier,
            "plays": self.plays,
            "wins": self.wins,
            "top2": self.top2,
            "totalVP": self.total_vp,
            "avgPosition": self.avg_position,
            "winRate": self.win_rate,
        }


def leader_stats(
    rounds: Iterable[Round],
    from_round: Optional[int] = None,
    to_round: Optional[int] = None,
) -> List[LeaderStat]:
    """Aggregate leader performance over completed rounds.

    Results without a leader are ignored. Leaders missing from the
    catalog are reported with tier "none".

    Args:
        rounds: Rounds to scan; incomplete rounds are skipped
        from_round: Lowest round number to include
        to_round: Highest round number to include

    Returns:
        One entry per leader played, best win rate first, then most plays
    """
    totals: Dict[str, Dict[str, int]] = {}
    for round_ in rounds:
        if not round_.is_complete:
            continue
        if from_round is not None and round_.number < from_round:
            continue
        if to_round is not None and round_.number > to_round:
            continue

        for table in round_.tables:
            for result in table.results:
                if not result.leader:
                    continue
                stat = totals.setdefault(
                    result.leader,
                    {"plays": 0, "wins": 0, "top2": 0, "vp": 0, "positions": 0},
                )
                stat["plays"] += 1
                stat["wins"] += result.position == 1
                stat["top2"] += result.position <= 2
                stat["vp"] += result.vp
                stat["positions"] += result.position

    stats = []
    for leader, stat in totals.items():
        info = get_leader_info(leader)
        plays = stat["plays"]
        stats.append(
            LeaderStat(
                leader=leader,
                tier=info.tier if info else "none",
                plays=plays,
                wins=stat["wins"],
                top2=stat["top2"],
                total_vp=stat["vp"],
                avg_position=round(stat["positions"] / plays, 2),
                win_rate=round(stat["wins"] / plays * 100, 1),
            )
        )

    stats.sort(key=lambda s: (-s.win_rate, -s.plays))
    return stats
