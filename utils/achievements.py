from utils.constants import ACHIEVEMENT_TITLES


def classify(score: int) -> dict:
    """Returns the achievement title and icon earned by an overall score.

    Thresholds are checked from highest to lowest, the first one the score
    reaches wins. Anything below every threshold gets the last title.
    """
    for threshold, title, icon in ACHIEVEMENT_TITLES:
        if score >= threshold:
            return {"title": title, "icon": icon}
    _, title, icon = ACHIEVEMENT_TITLES[-1]
    return {"title": title, "icon": icon}
