from markov_playlist.models import Song

A = Song(track="Alpha", artist="Artist A", album="First")
B = Song(track="Bravo", artist="Artist B", album="Second")
C = Song(track="Charlie", artist="Artist C", album="Third")
D = Song(track="Delta", artist="Artist D", album="Fourth")


def history_csv(newest_first: list[Song], extra_column: bool = False) -> str:
    header = "artist,album,track"
    if extra_column:
        header += ",date"
    lines = [header]
    for song in newest_first:
        line = f"{song.artist},{song.album},{song.track}"
        if extra_column:
            line += ",01 Jan 2024 10:00"
        lines.append(line)
    return "\n".join(lines) + "\n"
