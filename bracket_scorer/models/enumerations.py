from enum import Enum

class Round(str, Enum):
    FIRST_FOUR = "first_four"      # Play-in games
    ROUND_OF_64 = "round_of_64"
    ROUND_OF_32 = "round_of_32"
    SWEET_16 = "sweet_16"
    ELITE_8 = "elite_8"
    FINAL_FOUR = "final_four"
    CHAMPIONSHIP = "championship"
